import logging

from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from app.config.settings import GEMINI_API_KEY, GEMINI_MODEL

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Fallo al generar o interpretar una respuesta de Gemini."""


class GeminiClient:
    """Cliente minimo de Gemini que devuelve respuestas JSON validadas con pydantic."""

    def __init__(self, api_key=GEMINI_API_KEY, model=GEMINI_MODEL, temperature=0.2):
        if not api_key:
            raise AIServiceError("GEMINI_API_KEY no está configurado")
        self.model = model
        self.temperature = temperature
        self.client = genai.Client(api_key=api_key)
        logger.info("Cliente de Gemini inicializado con el modelo %s", model)

    async def generate_json(self, prompt, schema):
        """Genera contenido con salida JSON y lo valida contra `schema`."""
        config = types.GenerateContentConfig(
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=schema,
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except errors.APIError as e:
            logger.error("Error de la API de Gemini: %s", e)
            raise AIServiceError(f"Error de la API de Gemini: {e}") from e

        if not response.text:
            raise AIServiceError("Gemini devolvió una respuesta vacía")
        try:
            return schema.model_validate_json(response.text)
        except ValidationError as e:
            logger.error("Respuesta de Gemini con formato inválido: %s", response.text[:500])
            raise AIServiceError(f"Respuesta de Gemini con formato inválido: {e}") from e


_client = None


def get_ai_client():
    """Dependencia de FastAPI: instancia compartida de GeminiClient."""
    global _client
    if _client is None:
        _client = GeminiClient()
    return _client
