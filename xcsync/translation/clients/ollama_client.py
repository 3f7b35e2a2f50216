"""Client for an Ollama-style text generation endpoint."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ...config import get_config
from ...errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class GenerateReply:
    """The parts of a generate reply we use."""

    response: str
    done: bool
    done_reason: Optional[str] = None
    model: Optional[str] = None


class OllamaClient:
    """Client for the ``/api/generate`` endpoint in non-streaming JSON mode."""

    def __init__(
        self,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            model: Model name. If not provided, uses OLLAMA_MODEL from environment.
            endpoint: Full URL of the generate endpoint
            timeout: Seconds to wait for one reply
            session: Optional requests session to reuse connections
        """
        config = get_config()
        self.model = model or config.model
        if not self.model:
            raise ValueError("A model name is required")
        self.endpoint = endpoint or config.endpoint
        self.timeout = timeout if timeout is not None else config.timeout
        self.session = session or requests.Session()

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": prompt,
            "format": "json",
            "stream": False,
        }

    def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the model's raw reply text.

        Args:
            prompt: The full instruction text

        Returns:
            The ``response`` field, stripped of surrounding whitespace

        Raises:
            TransportError: On connection errors, timeouts, non-2xx status codes
                or a reply envelope that is not the expected JSON
        """
        reply = self.generate_reply(prompt)
        if not reply.done:
            logger.warning(
                "Reply from %s is incomplete (done_reason: %s)", self.endpoint, reply.done_reason or "unknown"
            )
        return reply.response.strip()

    def generate_reply(self, prompt: str) -> GenerateReply:
        """Send a prompt and return the decoded reply envelope."""
        logger.debug("Sending request to %s with model %s", self.endpoint, self.model)
        try:
            response = self.session.post(
                self.endpoint,
                json=self.build_payload(prompt),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Timed out after {self.timeout}s waiting for {self.endpoint}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {self.endpoint} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"HTTP {response.status_code} from {self.endpoint} "
                f"(is ollama running the model?): {response.text[:500]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Reply from {self.endpoint} is not JSON: {response.text[:500]}") from e

        if not isinstance(data, dict) or not isinstance(data.get("response", ""), str):
            raise TransportError(f"Unexpected reply structure from {self.endpoint}: {json.dumps(data)[:500]}")

        return GenerateReply(
            response=data.get("response") or "",
            done=bool(data.get("done", True)),
            done_reason=data.get("done_reason"),
            model=data.get("model"),
        )
