import logging
import openai
from openai import AsyncOpenAI

from . import config
from .errors import MissingCredential, UpstreamAuthFailure, UpstreamFailure
from .models import GENERATION_CONFIG, GenerationConfig, Prompt

# --- Setup Logging ---
logger = logging.getLogger(__name__)

# Response MIME types the chat-completions endpoint can enforce
RESPONSE_FORMATS = {
    "application/json": {"type": "json_object"},
    "text/plain": {"type": "text"},
}


class GenerationClient:
    """
    Sends one prompt to the generation service and returns its raw reply.

    Talks to the service through its OpenAI-compatible endpoint. Retries are
    disabled: every failure is reported to the caller as a GenerationError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = config.MODEL_NAME,
        base_url: str = config.LLM_BASE_URL,
        timeout: float = config.LLM_TIMEOUT,
        generation_config: GenerationConfig = GENERATION_CONFIG,
    ):
        if not api_key or api_key.isspace():
            logger.error("Generation service API key is not configured.")
            raise MissingCredential()

        self.model = model
        self.base_url = base_url
        self.generation_config = generation_config
        self._client = AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        await self._client.close()

    async def generate(self, prompt: Prompt) -> str:
        """
        Calls the generation service once and returns the reply text unparsed.
        """
        gen = self.generation_config
        logger.debug(f"Sending request to model '{self.model}'. User prompt length: {len(prompt.user)}")

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.user},
                ],
                temperature=gen.temperature,
                top_p=gen.top_p,
                max_tokens=gen.max_output_tokens,
                response_format=RESPONSE_FORMATS[gen.response_mime_type],
                extra_body={"top_k": gen.top_k},
                stream=False,
            )
        except openai.APITimeoutError as e:
            logger.error(f"Generation service timed out (model: {self.model}, URL: {self.base_url}): {e}")
            raise UpstreamFailure("Generation service timed out") from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error(f"Generation service rejected the API key: {e}")
            raise UpstreamAuthFailure() from e
        except openai.APIError as e:
            if "API key" in str(e):
                logger.error(f"Generation service rejected the API key: {e}")
                raise UpstreamAuthFailure() from e
            logger.error(
                f"Error calling generation service (model: {self.model}, URL: {self.base_url}): {e}",
                exc_info=True
            )
            raise UpstreamFailure(f"Failed to communicate with generation service: {e.message}") from e

        if not response.choices:
            logger.warning(f"Model '{self.model}' returned no choices.")
            return ""

        message = response.choices[0].message.content or ""
        logger.debug(f"Raw response from model: '{message}'")
        return message
