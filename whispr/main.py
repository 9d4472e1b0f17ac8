"""Command-line entry point for Whispr."""

import logging
import sys
from typing import Optional

import click

from whispr.config.config_loader import config
from whispr.utils.exceptions import WhisprError
from whispr.utils.logger import set_level, setup_logger

logger = setup_logger(__name__)


def session_options(f):
    """Recording options accepted by both the group and ``record``."""
    f = click.option(
        "--language", "-l", default=None, help="Language code for transcription"
    )(f)
    f = click.option("--model", "-m", default=None, help="Whisper model name or path")(f)
    f = click.option(
        "--duration",
        "-d",
        type=click.IntRange(min=1),
        default=None,
        help="Seconds of audio to record",
    )(f)
    return f


@click.group(invoke_without_command=True)
@session_options
@click.option("--debug", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    duration: Optional[int],
    model: Optional[str],
    language: Optional[str],
    debug: bool,
) -> None:
    """Whispr - record a short utterance and print what was said.

    Run without a subcommand to record and transcribe.
    """
    ctx.ensure_object(dict)
    ctx.obj["duration"] = duration or config.get("audio.default_duration", 5)
    ctx.obj["model"] = model
    ctx.obj["language"] = language or config.get("asr.language", "en")

    if debug:
        set_level(logging.DEBUG)

    if ctx.invoked_subcommand is None:
        ctx.invoke(record)


@cli.command()
@session_options
@click.pass_context
def record(
    ctx: click.Context,
    duration: Optional[int],
    model: Optional[str],
    language: Optional[str],
) -> None:
    """Record audio and transcribe it.

    Options given here take precedence over the same options on the group.
    """
    from whispr.asr.transcriber import ASRTranscriber
    from whispr.pipeline import Pipeline

    duration = duration or ctx.obj["duration"]
    language = language or ctx.obj["language"]
    model = model or ctx.obj["model"]
    pipeline = Pipeline(recognizer=ASRTranscriber(model_name=model))

    click.echo(f"Recording {duration}s of audio...")
    try:
        text = pipeline.run(duration, language)
    except KeyboardInterrupt:
        logger.info("Interrupted by user (Ctrl+C)")
        sys.exit(0)
    except WhisprError as e:
        logger.error(f"{e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(text if text else "(no speech detected)")


@cli.command()
def devices() -> None:
    """List audio input devices."""
    from whispr.audio.device_manager import list_input_devices

    inputs = list_input_devices()
    if not inputs:
        click.echo("No input devices found")
        return

    for device in inputs:
        marker = "*" if device["is_default"] else " "
        click.echo(
            f"{marker} [{device['index']}] {device['name']} "
            f"({device['channels']}ch, {int(device['default_samplerate'])}Hz)"
        )


def main() -> None:
    """Main function to run Whispr."""
    cli(obj={})


if __name__ == "__main__":
    main()
