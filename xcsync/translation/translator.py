"""Synchronize a string catalog against a text generation model."""

import json
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from ..config import SyncOptions
from ..errors import TransportError, ValidationError
from ..extraction.xcstrings_parser import XCStringsParser
from ..extraction.xcstrings_writer import XCStringsWriter
from ..languages import language_name, resolve_target_languages
from ..models.string_entry import StringUnit, XCStringsFile
from ..models.translation_result import (
    Accepted,
    AttemptResult,
    Failed,
    PairOutcome,
    SyncStats,
)
from ..validation.response_validator import ResponseValidator
from .clients.ollama_client import OllamaClient
from .decision import Decision, decide
from .prompts import build_translation_prompt

logger = logging.getLogger(__name__)

PersistCallback = Callable[[XCStringsFile], None]


class CatalogSynchronizer:
    """
    Fills in missing translations of a catalog one (term, language) pair at a time.

    Strategy:
    1. Resolve the target languages for the catalog
    2. For every language, walk the terms in sorted order
    3. Skip pairs that are already translated (unless forced or re-translating)
    4. Ask the model, validate the reply, retry up to ``options.retries`` times
    5. Store each accepted translation and persist the catalog right away
    """

    def __init__(
        self,
        options: SyncOptions,
        client: Optional[OllamaClient] = None,
        validator: Optional[ResponseValidator] = None,
        parser: Optional[XCStringsParser] = None,
        writer: Optional[XCStringsWriter] = None,
    ):
        """
        Initialize the synchronizer.

        Args:
            options: Run options
            client: Text generation client (built from the options if not provided)
            validator: Reply validator
            parser: Catalog parser
            writer: Catalog writer
        """
        self.options = options
        self.client = client or OllamaClient(
            model=options.model,
            endpoint=options.endpoint,
            timeout=options.timeout,
        )
        self.validator = validator or ResponseValidator()
        self.parser = parser or XCStringsParser()
        self.writer = writer or XCStringsWriter()

    def sync_files(self, paths: Iterable[Union[str, Path]]) -> SyncStats:
        """Synchronize several catalog files one after another."""
        stats = SyncStats()
        for path in paths:
            stats.merge(self.sync_file(path))
        return stats

    def sync_file(self, path: Union[str, Path]) -> SyncStats:
        """
        Load a catalog file, synchronize it and rewrite it after every accepted translation.

        Raises:
            FormatError: If the file is not a valid catalog or cannot be encoded
            ConfigError: If the target language selection is invalid
            OSError: If the file cannot be read or written
        """
        path = Path(path)
        logger.info("Reading: %s", path)
        catalog = self.parser.parse(path)

        def persist(updated: XCStringsFile) -> None:
            self.writer.write(updated, path)

        return self.sync_catalog(catalog, persist)

    def sync_catalog(self, catalog: XCStringsFile, persist: PersistCallback) -> SyncStats:
        """
        Synchronize an in-memory catalog.

        Args:
            catalog: The catalog, mutated in place
            persist: Called with the catalog after each accepted translation

        Returns:
            Per-pair statistics for the run
        """
        stats = SyncStats()
        terms = sorted(catalog.strings)
        languages = resolve_target_languages(self.options.target_policy, catalog)
        source_name = language_name(catalog.source_language)

        logger.info("Translating terms: %s", terms)
        logger.info("Target languages: %s", ", ".join(languages) or "none")

        for language in languages:
            for key in terms:
                outcome = self.sync_pair(catalog, key, language, source_name, persist, stats)
                stats.record(outcome)

        return stats

    def sync_pair(
        self,
        catalog: XCStringsFile,
        key: str,
        language: str,
        source_name: str,
        persist: PersistCallback,
        stats: Optional[SyncStats] = None,
    ) -> PairOutcome:
        """Process one (term, language) pair up to a terminal state."""
        entry = catalog.get_term(key)

        decision = decide(entry, language, self.options.force, self.options.retranslate)
        if decision is Decision.SKIP:
            return PairOutcome.SKIPPED

        target_name = language_name(language)
        term = entry.get_source_value(catalog.source_language)
        result = self.translate_pair(term, source_name, target_name, entry.comment, stats)

        if isinstance(result, Failed):
            logger.error(
                "Giving up on %s '%s' after %d attempts: %s",
                language, key, self.options.retries, result.error,
            )
            return PairOutcome.EXHAUSTED

        translation = result.translation
        logger.info("%s (%s): %s", target_name, language, translation.translation)
        if translation.explanation:
            logger.info("Explanation: %s", translation.explanation)

        catalog.set_localization(
            key, language, StringUnit(value=translation.translation, state=self.options.state)
        )
        persist(catalog)
        return PairOutcome.ACCEPTED

    def translate_pair(
        self,
        term: str,
        source_name: str,
        target_name: str,
        context: Optional[str] = None,
        stats: Optional[SyncStats] = None,
    ) -> AttemptResult:
        """
        Request a translation, retrying until one is accepted or attempts run out.

        Returns:
            ``Accepted`` with the first valid translation, or ``Failed`` with the
            error of the last attempt
        """
        description = f'Translating "{term}" from {source_name} to {target_name} using {self.client.model}'
        if context:
            description += f" with context: “{context}”"
        logger.info("%s…", description)

        prompt = build_translation_prompt(
            term, source_name, target_name, context=context, explain=self.options.explain
        )

        result: AttemptResult = Failed(TransportError("no attempts were made"))
        for attempt in range(1, self.options.retries + 1):
            if stats is not None:
                stats.attempts += 1
            result = self.attempt(prompt, term, source_name, target_name)
            if isinstance(result, Accepted):
                break
            logger.warning("Error in attempt #%d: %s", attempt, result.error)

        return result

    def attempt(self, prompt: str, term: str, source_name: str, target_name: str) -> AttemptResult:
        """Make a single provider call and validate the reply."""
        try:
            raw_reply = self.client.generate(prompt)
        except TransportError as e:
            return Failed(e)

        if self.options.verbose:
            logger.info("Response: %s", _pretty(raw_reply))

        try:
            translation = self.validator.validate(
                raw_reply, term, source_name, target_name, explain_required=self.options.explain
            )
        except ValidationError as e:
            return Failed(e)

        return Accepted(translation)


def _pretty(raw_reply: str) -> str:
    try:
        return json.dumps(json.loads(raw_reply), indent=2, ensure_ascii=False)
    except ValueError:
        return raw_reply
