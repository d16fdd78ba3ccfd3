"""Ingredient extraction from meal descriptions using an LLM."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from meal_nutrition.domain.extraction import ExtractionPayload, ParsedIngredient
from meal_nutrition.domain.meals import ExtractionSource
from meal_nutrition.services import legacy_parser

MIN_DESCRIPTION_LENGTH = 3
QUOTA_EXHAUSTED_WARNING = "extraction_quota_exhausted"

EXTRACTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number"},
                    "unit": {"type": "string", "enum": ["g", "ml", "un"]},
                },
                "required": ["name", "quantity", "unit"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}

SYSTEM_PROMPT = """\
Você é um nutricionista especialista em identificar ingredientes para análise \
nutricional usando a Tabela TACO.
Analise a descrição de uma refeição infantil e extraia os ingredientes \
individuais em JSON.

FORMATO DE RESPOSTA (JSON puro, sem texto extra):
{"foods":[{"name":"nome_do_alimento","quantity":100,"unit":"g"}]}

REGRAS:
1. Separe pratos compostos em seus ingredientes básicos. \
Ex: "Arroz com feijão e carne" vira 3 itens: "arroz", "feijão", "carne".
2. Use nomes curtos em português, como aparecem na Tabela TACO. \
Evite marcas ou preparos complexos. Ex: "beterraba ralada crua" -> "beterraba crua".
3. Use sempre gramas (g) ou mililitros (ml); use "un" apenas para unidades inteiras.
4. Se a quantidade não for informada, use estas PORÇÕES PADRÃO PARA CRIANÇAS:
   - Arroz/Massas/Cereais: 60g
   - Feijão/Leguminosas: 50g
   - Frango/Carnes/Ovos/Peixes: 50g
   - Legumes/Verduras: 40g
   - Frutas: 80g
   - Leite/Iogurte: 150ml
   - Suco: 100ml
   - Pão/Biscoito: 25g
   - Manteiga/Requeijão: 10g
   - Sopas/Caldos: 150ml

EXEMPLOS:
Entrada: "Picadinho de carne com legumes (cenoura e batata)"
Saída: {"foods":[{"name":"carne bovina cozida","quantity":50,"unit":"g"},\
{"name":"cenoura cozida","quantity":20,"unit":"g"},\
{"name":"batata cozida","quantity":20,"unit":"g"}]}

Entrada: "Banana amassada com aveia"
Saída: {"foods":[{"name":"banana","quantity":80,"unit":"g"},\
{"name":"aveia em flocos","quantity":15,"unit":"g"}]}
"""

_logger = logging.getLogger(__name__)


class ExtractionUnavailableError(RuntimeError):
    """Raised when the extraction service cannot be used."""


class ExtractionRateLimitedError(ExtractionUnavailableError):
    """Raised when the extraction service asks callers to back off."""


class ExtractionQuotaExceededError(ExtractionUnavailableError):
    """Raised when the extraction service quota is exhausted."""


class ExtractionClient(Protocol):
    """Interface for LLM ingredient extraction."""

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        system_prompt: str,
        meal_description: str,
        schema: dict[str, object],
    ) -> str:
        """Return the raw text produced for a meal description."""


@dataclass
class CancellationToken:
    """Flag shared with an extraction call so a newer request can supersede it."""

    cancelled: bool = False

    def cancel(self) -> None:
        """Mark the owning request as superseded."""
        self.cancelled = True

    def raise_if_cancelled(self) -> None:
        """Abort the current call if it has been superseded."""
        if self.cancelled:
            raise asyncio.CancelledError


@dataclass(frozen=True)
class ExtractionResult:
    """Ingredients extracted from a description and how they were obtained."""

    ingredients: tuple[ParsedIngredient, ...]
    source: ExtractionSource
    warnings: tuple[str, ...] = ()


@dataclass
class IngredientExtractor:
    """Turns meal sentences into ingredients, falling back to the legacy parser."""

    client: ExtractionClient | None
    model: str
    store: bool = False
    timeout_seconds: float = 10.0
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.5

    async def extract(
        self, meal_description: str, token: CancellationToken | None = None
    ) -> ExtractionResult:
        """Extract ingredients; never raises for service or format failures."""
        trimmed = meal_description.strip()
        if len(trimmed) < MIN_DESCRIPTION_LENGTH:
            return ExtractionResult(ingredients=(), source=ExtractionSource.NONE)
        if self.client is None:
            return _legacy(trimmed)

        try:
            raw = await self._call_with_retry(trimmed, token)
        except ExtractionQuotaExceededError:
            _logger.warning("Extraction quota exhausted, using legacy parser")
            return _legacy(trimmed, warnings=(QUOTA_EXHAUSTED_WARNING,))
        except ExtractionUnavailableError as exc:
            _logger.warning("Extraction unavailable, using legacy parser: %s", exc)
            return _legacy(trimmed)

        if token is not None:
            token.raise_if_cancelled()
        ingredients = parse_extraction_response(raw)
        return ExtractionResult(
            ingredients=tuple(ingredients), source=ExtractionSource.AI
        )

    async def _call_with_retry(
        self, meal_description: str, token: CancellationToken | None
    ) -> str:
        """Call the client, backing off exponentially while rate limited."""
        attempt = 0
        while True:
            if token is not None:
                token.raise_if_cancelled()
            try:
                return await asyncio.wait_for(
                    self.client.extract(  # type: ignore[union-attr]
                        model=self.model,
                        store=self.store,
                        system_prompt=SYSTEM_PROMPT,
                        meal_description=meal_description,
                        schema=EXTRACTION_SCHEMA,
                    ),
                    timeout=self.timeout_seconds,
                )
            except TimeoutError as exc:
                raise ExtractionUnavailableError(
                    f"Extraction timed out after {self.timeout_seconds}s"
                ) from exc
            except ExtractionRateLimitedError:
                attempt += 1
                if attempt > self.retry_attempts:
                    raise
                delay = self.retry_delay_seconds * 2 ** (attempt - 1)
                _logger.info(
                    "Extraction rate limited (attempt %s/%s), retrying in %.1fs",
                    attempt,
                    self.retry_attempts + 1,
                    delay,
                )
                await asyncio.sleep(delay)


def parse_extraction_response(raw: str) -> list[ParsedIngredient]:
    """Validate the service output; anything malformed yields an empty list."""
    data = _load_json(raw)
    if isinstance(data, dict):
        data = data.get("foods")
    if not isinstance(data, list):
        _logger.warning("Extraction response has no food list: %r", raw)
        return []
    try:
        payload = ExtractionPayload.model_validate({"foods": data})
    except ValidationError:
        _logger.warning("Extraction response failed validation: %r", raw)
        return []
    return payload.foods


def find_json_array(text: str) -> str | None:
    """Return the first balanced ``[...]`` substring that parses as JSON."""
    start = text.find("[")
    while start != -1:
        end = _balanced_end(text, start)
        if end is None:
            return None
        candidate = text[start : end + 1]
        try:
            json.loads(candidate)
        except json.JSONDecodeError:
            start = text.find("[", start + 1)
            continue
        return candidate
    return None


def _load_json(raw: str) -> object:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    candidate = find_json_array(raw)
    if candidate is None:
        _logger.warning("Extraction response is not JSON: %r", raw)
        return None
    return json.loads(candidate)


def _balanced_end(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
    return None


def _legacy(
    meal_description: str, warnings: tuple[str, ...] = ()
) -> ExtractionResult:
    return ExtractionResult(
        ingredients=tuple(legacy_parser.parse(meal_description)),
        source=ExtractionSource.LEGACY,
        warnings=warnings,
    )
