"""Tender extraction from scraped/search content using an LLM.

The model is asked for a JSON array of tender records. Its reply is free
text, so the first JSON array in it is located and every element is
validated against ``ParsedTender``; elements that fail validation are
dropped. Any failure of the model call degrades to an empty list.
"""

import json
from typing import Any, List, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from bidsmart.ai.prompts import (
    build_scrape_system_prompt,
    build_scrape_user_prompt,
    build_search_system_prompt,
    build_search_user_prompt,
)
from bidsmart.ai.retry import llm_retry
from bidsmart.core.exceptions import AIProcessingError, ParsingError
from bidsmart.core.logging import get_logger
from bidsmart.schemas import ParsedTender
from bidsmart.settings import Settings, settings as default_settings
from bidsmart.sourcing.dedup import dedupe_tenders

logger = get_logger("ai.extractor")


def find_json_array(text: str) -> Optional[List[Any]]:
    """Return the first JSON array embedded in ``text``.

    Surrounding prose and markdown code fences are skipped. Arrays that
    hold only scalars (e.g. a "[1]" footnote) are passed over in favour
    of the first array that is empty or contains objects.
    """
    if not text:
        return None

    decoder = json.JSONDecoder()
    start = text.find("[")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list) and (not value or any(isinstance(v, dict) for v in value)):
            return value
        start = text.find("[", start + 1)
    return None


def validate_tender_array(text: str) -> List[ParsedTender]:
    """Parse the tender records in a model reply, dropping invalid elements.

    Raises:
        ParsingError: If the reply contains no JSON array
    """
    items = find_json_array(text)
    if items is None:
        raise ParsingError(
            "No JSON array in model reply",
            raw_output=text,
            expected_schema="ParsedTender[]",
        )

    tenders: List[ParsedTender] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("Rejected tender #%d: not an object", idx)
            continue
        try:
            tenders.append(ParsedTender.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "Rejected tender #%d: %s",
                idx,
                "; ".join(err["msg"] for err in e.errors()),
            )

    if len(tenders) < len(items):
        logger.info("Kept %d of %d extracted records", len(tenders), len(items))
    return dedupe_tenders(tenders)


def parse_tender_array(text: str) -> List[ParsedTender]:
    """Parse and validate the tender records in a model reply.

    Args:
        text: Raw model output

    Returns:
        Valid records (possibly empty); never raises
    """
    try:
        return validate_tender_array(text)
    except ParsingError as e:
        logger.warning("%s: %s", e.message, e.raw_output or "")
        return []


class TenderExtractor:
    """Summarizes page/search content into tender records."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize extractor.

        Args:
            settings: Optional settings instance
            client: Optional pre-built OpenAI client
        """
        self._settings = settings or default_settings
        self._client = client

    @property
    def enabled(self) -> bool:
        """Extraction runs only when a model credential is configured."""
        return self._client is not None or bool(self._settings.ai_api_key)

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._settings.ai_api_key,
                base_url=self._settings.ai_base_url or None,
                max_retries=0,
            )
        return self._client

    async def extract_from_page(
        self,
        markdown: str,
        keywords: Optional[List[str]] = None,
    ) -> List[ParsedTender]:
        """Extract tenders from one scraped page (bounded prefix)."""
        content = markdown[: self._settings.scrape_markdown_limit]
        return await self._extract(
            build_scrape_system_prompt(keywords),
            build_scrape_user_prompt(content),
            operation="scrape",
        )

    async def extract_from_search(self, content: str) -> List[ParsedTender]:
        """Extract tenders from aggregated search results (bounded prefix)."""
        content = content[: self._settings.search_content_limit]
        return await self._extract(
            build_search_system_prompt(),
            build_search_user_prompt(content),
            operation="search",
        )

    async def _extract(self, system_prompt: str, user_prompt: str, operation: str) -> List[ParsedTender]:
        if not self.enabled:
            logger.info("No AI key configured - skipping %s extraction", operation)
            return []

        try:
            raw_content = await self._complete(system_prompt, user_prompt)
        except (OpenAIError, AIProcessingError) as e:
            logger.warning("%s extraction failed: %s", operation, e)
            return []

        logger.debug("Extraction raw response: %s", raw_content[:500])
        tenders = parse_tender_array(raw_content)
        logger.info("%s extraction: %d tenders", operation, len(tenders))
        return tenders

    @llm_retry
    async def _complete(self, system_prompt: str, user_prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self._settings.ai_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self._settings.ai_temperature,
        )
        if not response.choices:
            raise AIProcessingError(
                "Model returned no choices",
                model=self._settings.ai_model,
                prompt_preview=user_prompt,
            )
        return response.choices[0].message.content or "[]"
