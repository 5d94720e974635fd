"""CLI entry point for the creation workflow."""

import logging
import typer
from pathlib import Path
from typing import Optional

from . import __version__
from .config import config
from .errors import StudioFlowError
from .models import SCRIPT_LENGTH_PRESETS, ResearchedTopic, Step, VoiceProfile
from .store import YamlProjectStore, sort_newest_first

app = typer.Typer(
    name="studio-flow",
    help="AI-assisted video topic, script, voice, metadata and thumbnail workflow",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"studio-flow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Studio Flow - Research, script, voice and package videos using AI."""
    pass


@app.command()
def projects(
    store_path: Path = typer.Option(
        None,
        "--store",
        help="Project store file (defaults to STUDIOFLOW_PROJECTS)"
    ),
) -> None:
    """List saved projects, newest first."""
    store = YamlProjectStore(store_path or config.projects_path)
    saved = sort_newest_first(store.list_all())

    if not saved:
        typer.echo("You have no saved projects. Create one and save it!")
        return

    typer.echo(f"📁 {len(saved)} saved project(s):\n")
    for project in saved:
        typer.echo(f"• {project.display_title}")
        typer.echo(f"   Topic: {project.topic}")
        typer.echo(f"   Saved on: {project.created_at:%Y-%m-%d}")


def _show_error(controller) -> None:
    if controller.error_message:
        typer.echo(f"❌ {controller.error_message}")


def _run_step(controller, output: Path) -> bool:
    """Render the current step and apply one user action.

    Returns False when the user quits.
    """
    from .media import save_audio, save_thumbnail

    state = controller.state
    step = state.step

    if step is Step.TOPIC:
        query = typer.prompt(
            "\n🔎 Topic to research (leave empty for viral suggestions, 'q' to quit)",
            default="",
            show_default=False,
        )
        if query.strip().lower() == "q":
            return False
        typer.echo("   Working on it...")
        if query.strip():
            controller.research(query)
        else:
            controller.suggest()

    elif step is Step.TOPIC_SELECT:
        typer.echo("\n📋 Select a topic:")
        for i, candidate in enumerate(state.candidates, 1):
            typer.echo(f"   [{i}] {candidate.topic}")
            if isinstance(candidate, ResearchedTopic):
                if candidate.snippet:
                    typer.echo(f"       {candidate.snippet}")
                if candidate.source_url:
                    typer.echo(f"       Proof: {candidate.source_url}")
        choice = typer.prompt("Number (or 'b' to go back)")
        if choice.strip().lower() == "b":
            controller.back()
        elif choice.strip().isdigit():
            controller.select(int(choice) - 1)
        else:
            typer.echo("❌ Enter a topic number")

    elif step is Step.SCRIPT_LENGTH:
        presets = "/".join(str(p) for p in SCRIPT_LENGTH_PRESETS)
        typer.echo(f"\n📝 Topic: {state.selected_topic}")
        choice = typer.prompt(f"Script length in minutes ({presets}, any other number for custom, 'b' to go back)")
        if choice.strip().lower() == "b":
            controller.back()
            return True
        if choice.strip().isdigit() and int(choice) in SCRIPT_LENGTH_PRESETS:
            controller.set_length(int(choice))
        else:
            controller.set_custom_length(choice.strip())
        typer.echo("   Generating your script...")
        controller.generate_script()

    elif step is Step.SCRIPT_REVIEW:
        typer.echo(f"\n📜 Script:\n{state.script}\n")
        if state.audio:
            typer.echo(f"🔊 Audio ready ({state.audio.duration:.1f}s)")
        choice = typer.prompt(
            "[m] men's voice, [w] women's voice, [e] edit, [n] next, [b] back",
            default="n",
        ).strip().lower()
        if choice in ("m", "w"):
            typer.echo("   Generating AI voice...")
            profile = VoiceProfile.MALE if choice == "m" else VoiceProfile.FEMALE
            if controller.synthesize_voice(profile):
                path = save_audio(controller.state.audio, output)
                typer.echo(f"✅ Audio saved: {path}")
        elif choice == "e":
            edited = typer.edit(state.script)
            if edited is not None:
                controller.edit_script(edited.strip())
        elif choice == "b":
            controller.back()
        else:
            typer.echo("   Generating viral metadata...")
            if state.audio:
                controller.proceed()
            else:
                controller.skip_voice()

    elif step is Step.METADATA_REVIEW:
        metadata = state.metadata
        if metadata:
            typer.echo(f"\n🏷️  Title: {metadata.title}")
            typer.echo(f"   Description: {metadata.description}")
            typer.echo(f"   Hashtags: {metadata.hashtags}")
        else:
            typer.echo("\n🏷️  No metadata yet")
        # Saving requires metadata
        choice = typer.prompt(
            "[t] generate thumbnail, [r] regenerate metadata, [b] back",
            default="t" if metadata else "r",
        ).strip().lower()
        if choice == "r":
            typer.echo("   Generating viral metadata...")
            controller.regenerate_metadata()
        elif choice == "b":
            controller.back()
        else:
            typer.echo("   Generating 1280x720 thumbnail...")
            controller.generate_thumbnail()

    elif step is Step.THUMBNAIL:
        path = save_thumbnail(state.thumbnail, output)
        typer.echo(f"\n🖼️  Thumbnail saved: {path}")
        choice = typer.prompt(
            "[s] save project & start new, [g] generate another, [b] back",
            default="s",
        ).strip().lower()
        if choice == "g":
            controller.regenerate_thumbnail()
        elif choice == "b":
            controller.back()
        else:
            project = controller.save()
            if project:
                typer.echo(f"✅ Project saved: {project.display_title}")

    _show_error(controller)
    return True


@app.command()
def create(
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory for generated audio and thumbnails"
    ),
    store_path: Path = typer.Option(
        None,
        "--store",
        help="Project store file (defaults to STUDIOFLOW_PROJECTS)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Walk through topic, script, voice, metadata and thumbnail generation."""
    from .gateway import GenerationGateway
    from .workflow import WorkflowController

    setup_logging(verbose)

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    output = output or config.output_dir
    controller = WorkflowController(
        gateway=GenerationGateway(),
        store=YamlProjectStore(store_path or config.projects_path),
    )
    typer.echo("🎬 Studio Flow")

    try:
        while _run_step(controller, output):
            pass
    except StudioFlowError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
