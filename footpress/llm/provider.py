# footpress/llm/provider.py
import json
import logging
import requests
import certifi

from footpress import config

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    pass


def _resolved_model(explicit_model: str | None) -> str:
    """
    Resolve the model to call in this order:
    1) explicit model parameter
    2) config.LLM_MODEL (LLM_MODEL env, default "gemini-2.0-flash")
    """
    return (explicit_model or config.LLM_MODEL).strip()


def _make_body(user_prompt: str, system_prompt: str | None = None):
    body = {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": str(user_prompt or "")}]
            }
        ]
    }
    if system_prompt:
        body["systemInstruction"] = {"parts": [{"text": str(system_prompt)}]}
    return body


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        raise ProviderError(f"Empty or malformed response (no candidates). body={data}")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [p["text"] for p in parts if isinstance(p, dict) and "text" in p]
    if not texts:
        raise ProviderError(f"Response has no text parts. body={data}")
    return "".join(texts)


def call_llm_text(user_prompt: str, system_prompt: str | None = None, model: str | None = None) -> str:
    """
    Single synchronous text call to the Gemini generateContent API.

    No retries: a failed call is reported to the caller as ProviderError and the
    caller decides how to surface it.
    """
    api_key = config.GEMINI_API_KEY
    if not api_key:
        raise ProviderError("Missing GEMINI_API_KEY")

    model_name = _resolved_model(model)
    url = f"https://generativelanguage.googleapis.com/v1beta/models/{model_name}:generateContent"
    headers = {"Content-Type": "application/json"}
    params = {"key": api_key}
    body = _make_body(user_prompt, system_prompt)

    try:
        resp = requests.post(
            url,
            headers=headers,
            params=params,
            data=json.dumps(body, ensure_ascii=False),
            timeout=config.LLM_TIMEOUT_SECONDS,
            verify=certifi.where(),
        )
        resp.raise_for_status()
        data = resp.json()
    except requests.exceptions.RequestException as e:
        status = getattr(getattr(e, "response", None), "status_code", None)
        msg = f"HTTP {status}: {e}" if status is not None else f"{e}"
        raise ProviderError(f"LLM call failed: {msg}") from e
    except ValueError as e:
        raise ProviderError(f"LLM returned non-JSON body: {e}") from e

    return _extract_text(data)


def safe_call_llm(user_prompt: str, system_prompt: str | None = None, model: str | None = None):
    """
    Wrapper that never raises; returns (text, unavailable_flag).
    When unavailable_flag is True the caller must report the result as unavailable.
    """
    try:
        txt = call_llm_text(user_prompt, system_prompt=system_prompt, model=model)
        return txt, False
    except ProviderError as e:
        logger.error("LLM ProviderError: %s", e)
        return None, True
