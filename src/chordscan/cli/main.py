"""Main CLI entry point for chordscan."""

from pathlib import Path

import click
from rich.console import Console

from chordscan import __version__
from chordscan.config import get_settings

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="chordscan")
def main() -> None:
    """chordscan - chord recognition for audio recordings.

    Scans a recording at fixed time steps and reports the best-matching
    chord for each step.
    """
    pass


@main.command()
@click.argument("audio_file", type=click.Path(path_type=Path))
@click.option(
    "--frame-length",
    type=int,
    help="Analysis frame length in samples (power of two)",
)
@click.option(
    "--step",
    type=float,
    help="Seconds between analysis frames",
)
@click.option(
    "--downmix",
    type=click.Choice(["sum", "average", "left"]),
    help="How to fold stereo into one frame",
)
@click.option(
    "--no-chord",
    "no_chord_policy",
    type=click.Choice(["retain-last-on-silence", "overwrite-with-empty"]),
    help="What to report for steps without a chord",
)
@click.option(
    "--normalize/--no-normalize",
    default=None,
    help="Normalize pitch-class profiles to their maximum",
)
@click.option(
    "--dump-spectrum",
    type=click.Path(path_type=Path),
    help="Write one step's magnitude spectrum to this CSV file",
)
@click.option(
    "--dump-frame",
    type=click.IntRange(min=0),
    help="Step index to dump (default: 0)",
)
def scan(
    audio_file: Path,
    frame_length: int | None,
    step: float | None,
    downmix: str | None,
    no_chord_policy: str | None,
    normalize: bool | None,
    dump_spectrum: Path | None,
    dump_frame: int | None,
) -> None:
    """Scan AUDIO_FILE for chords.

    Prints one line per detected chord: the time in seconds and the label.
    """
    from chordscan.audio import load_audio
    from chordscan.pipeline import create_default_scanner

    if not audio_file.exists():
        console.print(f"[red]Error: File not found: {audio_file}[/red]")
        raise SystemExit(1)

    settings = get_settings()

    # Apply CLI overrides
    if frame_length is not None:
        settings.frame_length = frame_length
    if step is not None:
        if step <= 0:
            console.print("[red]Error: --step must be positive[/red]")
            raise SystemExit(1)
        settings.step_seconds = step
    if downmix is not None:
        settings.downmix = downmix  # type: ignore[assignment]
    if no_chord_policy is not None:
        settings.no_chord_policy = no_chord_policy  # type: ignore[assignment]
    if normalize is not None:
        settings.normalize_pcp = normalize
    if dump_spectrum is not None:
        settings.spectrum_dump_path = dump_spectrum
    if dump_frame is not None:
        settings.spectrum_dump_frame = dump_frame

    try:
        source = load_audio(audio_file)
    except Exception as e:
        console.print(f"[red]Error: Could not decode {audio_file}: {e}[/red]")
        raise SystemExit(1)

    console.print(f"[bold blue]chordscan[/bold blue] v{__version__}")
    console.print(
        f"Scanning: [green]{audio_file}[/green] "
        f"({source.total_length / source.sample_rate:.1f}s, "
        f"{source.sample_rate:.0f} Hz, {source.num_channels} ch)"
    )
    console.print()

    scanner = create_default_scanner(settings, source)
    result = scanner.scan()

    for event in result.events:
        label = event.label or "[dim]-[/dim]"
        console.print(f"{event.time:8.2f}s  {label}")

    if result.warnings:
        console.print("[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  - {warning}")

    if result.success:
        console.print()
        console.print(
            f"[bold green]Scan complete:[/bold green] {result.steps_completed} steps, "
            f"{len(result.events)} events ({result.total_duration:.1f}s)"
        )
    else:
        console.print("[bold red]Scan failed![/bold red]")
        console.print(f"[red]Error ({result.error_kind}): {result.error_message}[/red]")
        raise SystemExit(1)


@main.command()
def info() -> None:
    """Show current configuration and chord vocabulary."""
    from chordscan.models.analysis import CHORD_TEMPLATES

    settings = get_settings()

    console.print("[bold]Configuration[/bold]")
    console.print(f"  Frame length: {settings.frame_length}")
    console.print(f"  Step: {settings.step_seconds}s")
    console.print(f"  Downmix: {settings.downmix}")
    console.print(f"  No-chord policy: {settings.no_chord_policy}")
    console.print(f"  Normalize PCP: {settings.normalize_pcp}")
    console.print(f"  Spectrum dump: {settings.spectrum_dump_path or 'off'}")
    console.print()

    console.print("[bold]Chord templates[/bold]")
    for template in CHORD_TEMPLATES:
        intervals = ", ".join(str(i) for i in template.intervals)
        console.print(f"  {template.quality}: {{{intervals}}}")


if __name__ == "__main__":
    main()
