"""Landing page demo recorder.

Usage: python -m landing_recorder [url]
"""
from __future__ import annotations

import asyncio
import logging
import sys

from rich.console import Console
from rich.panel import Panel

from landing_recorder.config import DEFAULT_URL, RunSettings, load_settings
from landing_recorder.director import RunResult, record_landing

logger = logging.getLogger("landing_recorder")

console = Console()


def resolve_url(argv: list[str]) -> str:
    return argv[0] if argv else DEFAULT_URL


def print_banner(settings: RunSettings) -> None:
    console.print(Panel(
        f"Target URL: [bold]{settings.url}[/bold]\n"
        f"Output:     [bold]{settings.output_file}[/bold]",
        title="Landing Page Video Recorder",
        border_style="blue",
    ))


def print_summary(result: RunResult) -> None:
    if not result.ok:
        console.print(Panel(
            f"[red]{result.error or 'unknown error'}[/red]",
            title="Recording failed",
            border_style="red",
        ))
        return

    lines = [f"Video saved to [bold]{result.video_path}[/bold]"]
    if result.skipped_sections:
        lines.append(f"[yellow]Skipped sections: {', '.join(result.skipped_sections)}[/yellow]")
    if result.gif_path:
        lines.append(f"GIF saved to [bold]{result.gif_path}[/bold]")
    else:
        lines.append("To convert to GIF, run:")
        lines.append(
            f'  ffmpeg -i {result.video_path} -vf "fps=15,scale=1280:-1:flags=lanczos" -c:v gif landing-demo.gif'
        )
    console.print(Panel("\n".join(lines), title="Done", border_style="green"))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(name)s  %(message)s")

    settings = load_settings(resolve_url(args))
    print_banner(settings)

    try:
        result = asyncio.run(record_landing(settings))
    except Exception:
        logger.exception("Recording aborted")
        return 1

    print_summary(result)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
