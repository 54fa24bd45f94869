"""
Gradio front-end for Photo Conversation Service.

Pick or capture a photo, analyze it, read the caption and the AI opener,
type a reply and save it. One process serves one session.
"""
import sys
import logging
from pathlib import Path
from typing import Optional

import gradio as gr

# Add the service to Python path
# In Spaces, the structure is: spaces/app.py, but src/ is at the repo root
current_dir = Path(__file__).parent
if (current_dir / "src").exists():
    service_path = current_dir / "src"
else:
    service_path = current_dir.parent / "src"
sys.path.insert(0, str(service_path))

from photo_conversation.app import PhotoConversationApp
from photo_conversation.config_loader import load_config_from_env
from photo_conversation.media import LocalImageSource
from photo_conversation.memory import Stage
from photo_conversation.utils.log_cleanup import configure_logging

config = load_config_from_env()

configure_logging(config.log_level)
logger = logging.getLogger(__name__)

# Path of the file most recently delivered by the image component
_picked: dict = {"path": None}


def _pick_uploaded() -> Optional[str]:
    return _picked["path"]


agent_app = PhotoConversationApp(
    config,
    image_source=LocalImageSource(gallery_picker=_pick_uploaded, camera_picker=_pick_uploaded),
)
agent_app.initialize()


def _render(notice: Optional[str] = None):
    """Map the current session onto the UI components."""
    session = agent_app.session

    if notice:
        status = notice
    elif session.stage == Stage.ERROR:
        status = f"⚠️ {session.last_error}"
    elif session.stage == Stage.ANALYZING:
        status = "Analyzing image..."
    elif session.stage == Stage.IDLE:
        status = "Select or take a photo to analyze"
    else:
        status = ""

    return (
        status,
        session.caption or "",
        session.conversation or "",
        gr.update(value=session.user_response, interactive=session.stage == Stage.ANALYSIS_READY),
        gr.update(interactive=agent_app.can_analyze()),
        gr.update(interactive=agent_app.can_save()),
    )


async def on_image_change(path: Optional[str]):
    if not path:
        agent_app.clear()
        return _render()

    _picked["path"] = path
    outcome = await agent_app.select_from_gallery()
    return _render(outcome.notice)


async def on_analyze():
    response = await agent_app.analyze()
    if response is not None:
        logger.info(
            f"Analysis shown: caption={response.caption_source.value}, "
            f"conversation={response.conversation_source.value}, {response.latency_ms}ms"
        )
    return _render()


def on_response_change(text: str):
    agent_app.update_response(text or "")
    return gr.update(interactive=agent_app.can_save())


def on_save():
    result = agent_app.save_response()
    if result.saved:
        gr.Info(f"{result.title}: {result.message}")
        _picked["path"] = None
        return (None, *_render())
    return (gr.update(), *_render())


def on_clear():
    agent_app.clear()
    _picked["path"] = None
    return (None, *_render())


with gr.Blocks(title="Conversational Photo AI") as demo:
    gr.Markdown("# Conversational Photo AI")

    image_input = gr.Image(
        type="filepath",
        sources=["upload", "webcam"],
        label="Photo",
    )
    status_box = gr.Markdown("Select or take a photo to analyze")

    with gr.Row():
        analyze_btn = gr.Button("🔍 Analyze", variant="primary", interactive=False)
        clear_btn = gr.Button("❌ Clear")

    caption_box = gr.Textbox(label="Generated Caption", interactive=False)
    conversation_box = gr.Textbox(label="AI Response", interactive=False)
    response_box = gr.Textbox(
        label="Your Response",
        placeholder="Type your response here...",
        lines=3,
        interactive=False,
    )
    save_btn = gr.Button("Save Response", interactive=False)

    outputs = [status_box, caption_box, conversation_box, response_box, analyze_btn, save_btn]

    image_input.change(on_image_change, inputs=image_input, outputs=outputs)
    analyze_btn.click(on_analyze, outputs=outputs)
    response_box.change(on_response_change, inputs=response_box, outputs=save_btn)
    save_btn.click(on_save, outputs=[image_input, *outputs])
    clear_btn.click(on_clear, outputs=[image_input, *outputs])


if __name__ == "__main__":
    demo.launch()
