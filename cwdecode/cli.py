"""Command-line interface for cwdecode.

Provides commands for:
- decode: Decode Morse code from an audio file
- synth: Write a synthetic keyed-tone WAV file from a dot/dash pattern
- demo: Synthesize a pattern in memory and decode it
- info: Show audio file information
"""

import logging
import time
import typer
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import DecoderConfig, Token
from .core.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DETECTOR_WINDOW,
    DEFAULT_UNIT_GROUP,
    DEFAULT_SR,
    DEFAULT_TONE_FREQ,
)

app = typer.Typer(
    name="cwdecode",
    help="Streaming Morse code (CW) audio decoder",
    rich_markup_mode="markdown",
)
console = Console()


@dataclass
class StageTimings:
    """Wall-clock seconds spent in each CLI stage."""

    stages: Dict[str, float] = field(default_factory=dict)

    @contextmanager
    def measure(self, stage: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            self.stages[stage] = time.perf_counter() - start

    def to_dict(self) -> Dict[str, Any]:
        return {"stages": dict(self.stages), "total_time": sum(self.stages.values())}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _decode_and_print(pipeline, chunks, threaded: bool) -> List[Token]:
    """Decode chunks, printing rendered text as tokens arrive."""
    from .output import TokenRenderer

    renderer = TokenRenderer()
    tokens = pipeline.decode_threaded(chunks) if threaded else pipeline.decode(chunks)
    decoded: List[Token] = []
    for token in tokens:
        decoded.append(token)
        text = renderer.render_token(token)
        if text:
            console.print(text, end="", markup=False, highlight=False, soft_wrap=True)
    console.print()
    return decoded


@app.command()
def decode(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, OGG, MP3)"),
    chunk_size: int = typer.Option(
        DEFAULT_CHUNK_SIZE, "-c", "--chunk-size", help="Samples per energy estimate"
    ),
    sr: int = typer.Option(
        DEFAULT_SR, "--sr", help="Resample to this rate before chunking (Hz)"
    ),
    window: int = typer.Option(
        DEFAULT_DETECTOR_WINDOW, "-w", "--window", help="Amplitudes per tone/silence threshold"
    ),
    group: int = typer.Option(
        DEFAULT_UNIT_GROUP, "-g", "--group", help="Runs per unit estimate"
    ),
    discard_partial: bool = typer.Option(
        False, "--discard-partial", help="Discard trailing partial windows instead of flushing them"
    ),
    threaded: bool = typer.Option(
        False, "-t", "--threaded", help="Run each stage in its own thread"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Decode Morse code from an audio file.

    **Examples:**

        cwdecode decode cq.wav

        cwdecode decode cq.wav --window 200 --group 30 --json
    """
    from .input import AudioLoader, chunk_samples
    from .pipeline import DecoderPipeline

    _configure_logging(verbose)

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        config = DecoderConfig(
            chunk_size=chunk_size,
            detector_window=window,
            unit_group=group,
            flush_partial=not discard_partial,
        ).validate()
        if sr < 1:
            raise ValueError(f"sr must be >= 1, got {sr}")
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    timings = StageTimings()

    loader = AudioLoader(target_sr=sr, chunk_size=config.chunk_size)
    with timings.measure("load"):
        try:
            samples, sr = loader.load(str(input_file))
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    pipeline = DecoderPipeline(config)
    chunks = chunk_samples(samples, config.chunk_size)

    with timings.measure("decode"):
        if json_output:
            tokens = list(pipeline.decode_threaded(chunks) if threaded else pipeline.decode(chunks))
        else:
            console.print(f"[blue]Decoding:[/blue] {input_file}")
            tokens = _decode_and_print(pipeline, chunks, threaded)

    if json_output:
        from .output import TokenRenderer

        result = {
            "input": str(input_file),
            "sample_rate": sr,
            "duration": loader.get_duration(samples, sr),
            "config": config.to_dict(),
            "text": TokenRenderer().render(tokens),
            "tokens": [t.value for t in tokens],
            "timings": timings.to_dict(),
            "stats": pipeline.stats.to_dict(),
        }
        console.print_json(data=result)
    elif verbose:
        _show_stats_table(pipeline.stats, timings)


@app.command()
def synth(
    pattern: str = typer.Argument(..., help="Pattern of . - and gaps (' ' letter, '/' word, '|' pause)"),
    output: Path = typer.Option(..., "-o", "--output", help="Output WAV file path"),
    unit_ms: float = typer.Option(60.0, "--unit-ms", help="Dit length in milliseconds"),
    freq: float = typer.Option(DEFAULT_TONE_FREQ, "-f", "--freq", help="Tone frequency (Hz)"),
    sr: int = typer.Option(DEFAULT_SR, "--sr", help="Sample rate (Hz)"),
    noise: float = typer.Option(0.0, "--noise", help="White noise level (0-1)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Noise seed"),
):
    """Write a synthetic Morse code WAV file.

    **Examples:**

        cwdecode synth "... --- ..." -o sos.wav

        cwdecode synth -o cq.wav --unit-ms 40 --noise 0.05 -- "-.-. --.-"
    """
    from scipy.io import wavfile
    from .input import MorseSynthesizer

    synthesizer = MorseSynthesizer(sr=sr, tone_freq=freq, unit_ms=unit_ms, noise=noise, seed=seed)
    try:
        samples = synthesizer.synthesize(pattern)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    wavfile.write(str(output), sr, samples)
    console.print(f"[green]Wrote {len(samples) / sr:.2f}s to {output}[/green]")


@app.command()
def demo(
    pattern: str = typer.Argument("... --- ...", help="Pattern to synthesize and decode"),
    unit_ms: float = typer.Option(24.0, "--unit-ms", help="Dit length in milliseconds"),
    noise: float = typer.Option(0.0, "--noise", help="White noise level (0-1)"),
    repeat: int = typer.Option(3, "-r", "--repeat", help="Times to repeat the pattern (word gap between)"),
    threaded: bool = typer.Option(False, "-t", "--threaded", help="Run each stage in its own thread"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Synthesize a pattern in memory and decode it."""
    from .input import MorseSynthesizer, chunk_samples
    from .pipeline import DecoderPipeline

    _configure_logging(verbose)

    text = " / ".join([pattern] * max(repeat, 1))
    synthesizer = MorseSynthesizer(unit_ms=unit_ms, noise=noise, seed=0)
    try:
        samples = synthesizer.synthesize(text)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    config = DecoderConfig()
    pipeline = DecoderPipeline(config)
    console.print(f"[blue]Pattern:[/blue] {text}")
    console.print("[blue]Decoded:[/blue] ", end="")
    _decode_and_print(pipeline, chunk_samples(samples, config.chunk_size), threaded)

    _show_stats_table(pipeline.stats)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "-c", "--chunk-size", help="Samples per chunk"),
):
    """Show information about an audio file."""
    import librosa
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    loader = AudioLoader(chunk_size=chunk_size)
    try:
        samples, sr = loader.load(str(input_file))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    native_sr = librosa.get_samplerate(str(input_file))

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(samples, sr):.2f} seconds")
    console.print(f"  Native sample rate: {native_sr} Hz")
    console.print(f"  Sample rate: {sr} Hz (resampled for decoding)")
    console.print(f"  Samples: {len(samples):,}")
    console.print(f"  Chunks: {-(-len(samples) // chunk_size):,} of {chunk_size} samples")


def _show_stats_table(stats, timings: Optional[StageTimings] = None):
    """Display decoding statistics in a table."""
    table = Table(title="Decoding Statistics")
    table.add_column("Measure", style="cyan")
    table.add_column("Value", style="yellow")

    table.add_row("Chunks", str(stats.chunks))
    table.add_row("Tone events", str(stats.events))
    table.add_row("Runs", str(stats.runs))
    for token in Token:
        table.add_row(f"Tokens: {token.value}", str(stats.token_counts.get(token.value, 0)))
    table.add_row("Error rate", f"{stats.error_rate:.1%}")
    table.add_row("Unit estimates", ", ".join(str(u) for u in stats.units) or "-")
    table.add_row("Discarded", f"{stats.discarded_amplitudes} amplitudes, {stats.discarded_runs} runs")
    if timings is not None:
        for stage, seconds in timings.stages.items():
            table.add_row(f"Time: {stage}", f"{seconds:.2f}s")

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
