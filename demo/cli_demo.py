#!/usr/bin/env python3
"""
Interactive CLI demo for Photo Conversation Service.

Commands:
    gallery <path>   pick an image file
    camera <path>    "capture" an image file
    analyze          caption the image and get a conversation opener (runs in background)
    reply <text>     type your response
    save             save the response
    clear            start over
    status           show the session
    quit             exit

Imports assume PYTHONPATH=src is set, or the package is installed.
"""
import asyncio
import sys
from typing import Optional

from photo_conversation.app import PhotoConversationApp
from photo_conversation.config_loader import load_config_from_env
from photo_conversation.media import ImageSourceKind, LocalImageSource
from photo_conversation.memory import Stage
from photo_conversation.utils.log_cleanup import configure_logging


class PromptPermissions:
    """Asks once per source on the terminal; remembers the answer."""

    def __init__(self):
        self._granted = {}

    async def request(self, kind: ImageSourceKind) -> bool:
        if kind not in self._granted:
            answer = await asyncio.to_thread(input, f"Allow access to your {kind.value}? [y/N] ")
            self._granted[kind] = answer.strip().lower() in ("y", "yes")
        return self._granted[kind]


class PathPicker:
    """Hands the path typed with the last gallery/camera command to the image source."""

    def __init__(self):
        self.path: Optional[str] = None

    def __call__(self) -> Optional[str]:
        path, self.path = self.path, None
        return path


def print_banner():
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  Conversational Photo AI - Interactive CLI Demo")
    print("=" * 60)
    print("\nCommands: gallery <path> | camera <path> | analyze | reply <text>")
    print("          save | clear | status | quit")
    print("-" * 60 + "\n")


def print_session(app: PhotoConversationApp):
    """Print the current session."""
    session = app.session
    print(f"\n📌 Stage: {session.stage.value}")
    if session.image:
        print(f"🖼️  Image: {session.image.uri}")
    if session.stage == Stage.ANALYZING:
        print("⏳ Analyzing image...")
    if session.last_error:
        print(f"❌ {session.last_error}")
    if session.caption:
        print(f"📝 Caption: {session.caption}")
    if session.conversation:
        print(f"💬 AI: {session.conversation}")
    if session.user_response:
        print(f"✍️  You: {session.user_response}")
    print("-" * 60)


async def run_analysis(app: PhotoConversationApp):
    response = await app.analyze()
    if response is None:
        if app.session.stage == Stage.ERROR:
            print_session(app)
        return

    print(f"\n📝 Caption: {response.caption}  [{response.caption_source.value}]")
    print(f"💬 AI: {response.conversation}  [{response.conversation_source.value}]")
    print(f"⚡ Latency: {response.latency_ms}ms")
    print("Type 'reply <text>' then 'save'.")
    print("-" * 60)


async def main_async() -> int:
    """Main CLI loop."""
    config = load_config_from_env()
    log_file = configure_logging(config.log_level, logs_dir="logs", prefix="cli_demo")
    print_banner()
    if log_file:
        print(f"📄 Logging to {log_file}\n")

    picker = PathPicker()
    app = PhotoConversationApp(
        config,
        image_source=LocalImageSource(
            gallery_picker=picker,
            camera_picker=picker,
            permissions=PromptPermissions(),
        ),
    )
    app.initialize()

    pending = set()

    while True:
        try:
            line = (await asyncio.to_thread(input, "You: ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!\n")
            break

        if not line:
            continue

        command, _, argument = line.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in ("quit", "exit", "q"):
            print("\n👋 Thanks for using Conversational Photo AI! Goodbye!\n")
            break

        if command in ("gallery", "camera"):
            if not argument:
                print(f"Usage: {command} <path>")
                continue
            picker.path = argument
            if command == "gallery":
                outcome = await app.select_from_gallery()
            else:
                outcome = await app.capture_from_camera()
            if outcome.notice:
                print(f"\n🔒 Permission Required: {outcome.notice}")
            print_session(app)

        elif command == "analyze":
            if not app.can_analyze():
                print("Analyze is not available right now.")
                continue
            task = asyncio.create_task(run_analysis(app))
            pending.add(task)
            task.add_done_callback(pending.discard)

        elif command == "reply":
            if not app.update_response(argument):
                print("Nothing to reply to yet; analyze an image first.")

        elif command == "save":
            result = app.save_response()
            if result.saved:
                print(f"\n✅ {result.title}: {result.message}")
            else:
                print("Type a response first ('reply <text>').")

        elif command == "clear":
            app.clear()
            print_session(app)

        elif command == "status":
            print_session(app)

        else:
            print(f"Unknown command: {command}")

    for task in pending:
        task.cancel()

    return 0


def main() -> int:
    return asyncio.run(main_async())


if __name__ == "__main__":
    sys.exit(main())
