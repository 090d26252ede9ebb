"""Vision inference through DashScope Qwen-VL models.

``DashscopeVisionBackend`` sends one screenshot plus an instruction prompt to
a single model with a single API key.  ``InferenceClient`` walks the model
priority list, switching API keys when a quota error comes back, and returns
the first non-empty answer.
"""

from __future__ import annotations

import base64
from typing import Any, Callable, Optional

from credentials import CredentialPool, ModelPriorityList
from errors import QUOTA_EXHAUSTED_MESSAGE, InferenceError
from interfaces import VisionBackend
from logger import log
from models import FailureKind

try:
    import dashscope
except Exception:  # pragma: no cover
    dashscope = None  # type: ignore

QUOTA_MARKERS = ("throttling", "quota", "resource_exhausted", "arrearage")
NOT_FOUND_MARKERS = ("modelnotfound", "model_not_found", "not found", "404")

ANSWER_PROMPT = """Look at the image and analyze what is being asked.

IMPORTANT RULES:

1. **For Multiple Choice Questions (MCQ)**:
   - Return ONLY the letter of the correct answer (A, B, C, or D)
   - Do NOT return the full text of the option
   - Do NOT add any explanation
   - Example: If option B is correct, return: B

2. **For Programming/Coding Questions**:
   - Provide the COMPLETE, WORKING code solution without comments
   - Include ALL necessary code, not just a summary
   - Do NOT truncate or summarize the code
   - The code should be copy-paste ready

3. **For Text/Theory Questions**:
   - Provide a concise but complete answer
   - Include all key points needed to answer the question

4. **For Math/Calculation Questions**:
   - Provide the final answer with any necessary steps

CRITICAL: For code questions, provide the FULL working solution, not a description or summary!
"""


def classify_failure(status_code: Optional[int], code: str = "", message: str = "") -> FailureKind:
    """Map an HTTP status and DashScope error code/message to a failure kind."""
    low = f"{code} {message}".lower()
    if status_code == 429 or any(marker in low for marker in QUOTA_MARKERS):
        return FailureKind.QUOTA_EXCEEDED
    if status_code == 404 or any(marker in low for marker in NOT_FOUND_MARKERS):
        return FailureKind.NOT_FOUND
    return FailureKind.OTHER


def _png_data_url(image_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(image_bytes).decode("ascii")


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict) and name in obj:
        return obj[name]
    return getattr(obj, name, None)


class DashscopeVisionBackend:
    def __init__(self, request_timeout_s: float = 30.0) -> None:
        self._request_timeout_s = request_timeout_s

    def generate(self, api_key: str, model: str, prompt: str, image_bytes: bytes) -> str:
        if dashscope is None:
            raise InferenceError("dashscope is not installed", FailureKind.OTHER)

        try:
            response = dashscope.MultiModalConversation.call(
                api_key=api_key,
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"image": _png_data_url(image_bytes)},
                            {"text": prompt},
                        ],
                    }
                ],
                result_format="message",
                timeout=self._request_timeout_s,
            )
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            raise InferenceError(message, classify_failure(None, "", message)) from exc

        status_code = _field(response, "status_code")
        if status_code is not None and status_code != 200:
            code = str(_field(response, "code") or "")
            message = str(_field(response, "message") or "")
            detail = f"{status_code} {code}: {message}".strip()
            raise InferenceError(detail, classify_failure(status_code, code, message))

        return self._extract_text(response)

    def _extract_text(self, response: object) -> str:
        """Pull the answer text from a DashScope multimodal response."""
        output = _field(response, "output") or {}
        choices = _field(output, "choices") or []
        if not choices:
            return ""
        message = _field(choices[0], "message") or {}
        content = _field(message, "content") or []
        if isinstance(content, str):
            return content
        parts = [str(_field(item, "text") or "") for item in content if isinstance(item, dict)]
        return "".join(parts)


class InferenceClient:
    def __init__(
        self,
        backend: VisionBackend,
        credentials: CredentialPool,
        models: ModelPriorityList,
    ) -> None:
        self._backend = backend
        self._credentials = credentials
        self._models = models

    @property
    def credentials(self) -> CredentialPool:
        return self._credentials

    def infer(
        self,
        image_bytes: bytes,
        prompt: str,
        on_attempt: Optional[Callable[[str], None]] = None,
    ) -> str:
        last_error = ""
        for model in self._models.in_priority_order():
            log.info("Trying model: %s", model)
            if on_attempt:
                on_attempt(model)
            try:
                text = self._call(model, prompt, image_bytes)
            except InferenceError as exc:
                log.warning("Error with %s (%s): %s", model, exc.kind.value, exc)
                if exc.kind == FailureKind.QUOTA_EXCEEDED:
                    text = self._retry_with_next_key(model, prompt, image_bytes)
                    if text is None:
                        last_error = QUOTA_EXHAUSTED_MESSAGE
                        continue
                else:
                    last_error = exc.message
                    continue

            if text:
                log.info("Success with %s", model)
                return text
            last_error = f"{model} returned an empty response"
            log.warning(last_error)

        raise InferenceError(last_error or "All models failed")

    def _call(self, model: str, prompt: str, image_bytes: bytes) -> str:
        text = self._backend.generate(self._credentials.current(), model, prompt, image_bytes)
        return (text or "").strip()

    def _retry_with_next_key(self, model: str, prompt: str, image_bytes: bytes) -> Optional[str]:
        if not self._credentials.advance():
            log.warning("All API keys have been tried")
            return None
        try:
            text = self._call(model, prompt, image_bytes)
        except InferenceError as exc:
            log.warning("Retry with %s failed: %s", model, exc)
            return None
        return text or None
