import time
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


async def track_llm_call(
    generation_client,
    prompt: str,
    config: dict,
    usage_controller=None,
    run_id: str = None,
    file_id: str = None,
    action_type: str = "generation"
):
    """
    Wraps an LLM generate() call with latency measurement and usage logging.

    Returns:
        LLMResponse: the raw response from the generation client.
    """
    start_time = time.perf_counter()
    response = await generation_client.generate(prompt=prompt, config=config)
    latency_ms = int((time.perf_counter() - start_time) * 1000)

    if usage_controller and run_id and response.usage_metadata:
        await usage_controller.log_usage(
            run_id=run_id,
            model_id=generation_client.model_id,
            action_type=action_type,
            usage_metadata=response.usage_metadata,
            file_id=file_id,
            latency_ms=latency_ms
        )

    return response


def fill_prompt(template: str, **values) -> str:
    """Substitute {name} placeholders without touching the JSON braces around them."""
    for key, value in values.items():
        template = template.replace("{" + key + "}", str(value))
    return template


def format_transcript(transcript: list[dict], bullet: str = "") -> str:
    return "\n".join(
        f"{bullet}{turn.get('role', 'unknown')}: {turn.get('content', '')}"
        for turn in transcript
    )


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 string (including a trailing 'Z') into an aware datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def parse_structured(content, schema):
    """
    Validate a model response against a pydantic schema.

    Accepts an already-decoded dict or a JSON string, tolerating the
    markdown fences some providers wrap around JSON output.
    """
    if isinstance(content, dict):
        return schema.model_validate(content)
    text = (content or "").strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[-1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    return schema.model_validate_json(text.strip())
