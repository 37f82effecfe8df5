import asyncio
import base64

import pytest

from conftest import image_response, text_response
from nexus_mentor.prompts import IMAGE_PROMPT_CORE, IMAGE_PROMPT_MVP, IMAGE_PROMPT_SCALE, phase_image_prompt

BLUEPRINT = b"\x89PNG\r\n\x1a\nblueprint"
BLUEPRINT_URL = "data:image/png;base64," + base64.b64encode(BLUEPRINT).decode()


def generate(router, title="Phase 1: MVP", credential="key", aspect_ratio="16:9"):
    return asyncio.run(router.generate_phase_image(title, "Ship a copilot", aspect_ratio, credential))


def edit(router, image, prompt="add a red glow", credential="key"):
    return asyncio.run(router.edit_phase_image(image, prompt, credential))


@pytest.mark.parametrize(
    "title, template",
    [
        ("Phase 1: MVP Launch", IMAGE_PROMPT_MVP),
        ("Phase 2: Core Engineering", IMAGE_PROMPT_CORE),
        ("Phase 3: Architect", IMAGE_PROMPT_SCALE),
        ("mvp lowercase", IMAGE_PROMPT_SCALE),
    ],
)
def test_phase_prompt_template(title, template):
    prompt = phase_image_prompt(title)
    assert template in prompt
    assert prompt.startswith("Render a high-quality sci-fi infographic: ")
    assert prompt.endswith("No text.")


def test_no_credential_returns_placeholder_url(router, backend):
    url = generate(router, title="Phase 2: Core", credential=None)
    assert url == "https://placehold.co/800x450/0f172a/0078D4?text=Phase%202%3A%20Core+Blueprint+(Simulation)"
    assert backend.requests == []


def test_primary_model_success(router, backend):
    backend.script.append(image_response(BLUEPRINT))
    assert generate(router, aspect_ratio="4:3") == BLUEPRINT_URL

    (req,) = backend.requests
    assert req.model == "image-pro"
    assert req.config.image_config.aspect_ratio == "4:3"
    assert req.config.image_config.image_size == "1K"
    assert req.parts[0].text == phase_image_prompt("Phase 1: MVP")


def test_primary_failure_falls_back_to_fast_model(router, backend):
    backend.script.extend([PermissionError("quota"), image_response(BLUEPRINT, "image/webp")])
    url = generate(router)

    assert url == "data:image/webp;base64," + base64.b64encode(BLUEPRINT).decode()
    assert [r.model for r in backend.requests] == ["image-pro", "image-flash"]
    fallback = backend.requests[1]
    assert fallback.config.image_config.aspect_ratio == "16:9"
    assert fallback.config.image_config.image_size is None


def test_both_models_failing_returns_none(router, backend):
    backend.script.extend([PermissionError("quota"), RuntimeError("down")])
    assert generate(router) is None
    assert len(backend.requests) == 2


def test_completed_call_without_image_ends_chain(router, backend):
    backend.script.append(text_response("I cannot draw that."))
    assert generate(router) is None
    assert len(backend.requests) == 1


def test_edit_without_credential_is_absent(router, backend):
    assert edit(router, BLUEPRINT_URL, credential=None) is None
    assert edit(router, BLUEPRINT_URL, credential="") is None
    assert backend.requests == []


@pytest.mark.parametrize(
    "image",
    [
        BLUEPRINT_URL,
        "data:image/jpeg;base64," + base64.b64encode(BLUEPRINT).decode(),
        base64.b64encode(BLUEPRINT).decode(),
    ],
)
def test_edit_strips_data_url_prefix(router, backend, image):
    edited = b"edited-bytes"
    backend.script.append(image_response(edited))
    url = edit(router, image, prompt="add a red glow")

    assert url == "data:image/png;base64," + base64.b64encode(edited).decode()
    (req,) = backend.requests
    assert req.model == "image-flash"
    img, text = req.parts
    assert img.inline_data.mime_type == "image/png"
    assert img.inline_data.data == BLUEPRINT
    assert text.text == "Edit this image: add a red glow. Maintain the sci-fi holographic style."


def test_edit_failures_return_none(router, backend):
    backend.script.append(RuntimeError("boom"))
    assert edit(router, BLUEPRINT_URL) is None


def test_edit_with_undecodable_image_returns_none(router, backend):
    assert edit(router, "data:image/gif;base64,R0lGOD") is None
    assert backend.requests == []


def test_edit_response_without_image_returns_none(router, backend):
    backend.script.append(text_response("no image for you"))
    assert edit(router, BLUEPRINT_URL) is None
