import json
import logging

import pytest

from xcsync.config import SyncOptions
from xcsync.errors import ConfigError, FormatError, TransportError
from xcsync.extraction.xcstrings_parser import XCStringsParser
from xcsync.models.translation_result import Accepted, Failed, PairOutcome
from xcsync.translation.translator import CatalogSynchronizer


def _synchronizer(client, **option_values):
    option_values.setdefault("model", "test-model")
    option_values.setdefault("retries", 3)
    return CatalogSynchronizer(SyncOptions(**option_values), client=client)


def _reload(path):
    return XCStringsParser().parse(path)


class TestSyncFile:
    def test_fills_missing_translations(self, catalog_path, make_client, echo):
        client = make_client(echo)
        stats = _synchronizer(client).sync_file(catalog_path)

        catalog = _reload(catalog_path)
        # languages already present are de and fr; every term is checked for both
        assert stats.total == 8
        assert catalog.strings["Cancel"].get_unit("fr").value == "[French] Cancel"
        assert catalog.strings["Cancel"].get_unit("fr").state == "needs_review"
        assert catalog.strings["Hello %@, you have %d items"].get_unit("de").value == (
            "[German] Hello %@, you have %d items"
        )
        # existing translations are left alone
        assert catalog.strings["Save"].get_unit("de").value == "Speichern"
        assert catalog.strings["Hello %@, you have %d items"].get_unit("fr").state == "translated"

    def test_plural_variations_kept_when_unit_added(self, catalog_path, make_client, echo):
        _synchronizer(make_client(echo), languages=["de"]).sync_file(catalog_path)

        loc = _reload(catalog_path).strings["Open https://example.com/help"].localizations["de"]
        assert loc.string_unit.value == "[German] Open https://example.com/help"
        assert sorted(loc.variations["plural"]) == ["one", "other"]

    def test_second_run_is_idempotent(self, catalog_path, make_client, echo):
        _synchronizer(make_client(echo)).sync_file(catalog_path)
        first = catalog_path.read_bytes()

        client = make_client(echo)
        stats = _synchronizer(client).sync_file(catalog_path)

        assert stats.accepted == 0
        assert stats.skipped == stats.total
        assert client.prompts == []
        assert catalog_path.read_bytes() == first

    def test_persists_after_every_accepted_translation(self, sample_catalog, make_client, echo):
        snapshots = []

        def persist(catalog):
            snapshots.append(catalog.strings["Cancel"].get_unit("ja") is not None)

        _synchronizer(make_client(echo), languages=["ja"]).sync_catalog(sample_catalog, persist)
        # one write per accepted term, Cancel is the first term in sorted order
        assert snapshots == [True, True, True, True]

    def test_custom_output_state(self, sample_catalog, make_client, echo):
        _synchronizer(make_client(echo), languages=["ja"], state="translated").sync_catalog(
            sample_catalog, lambda catalog: None
        )
        assert sample_catalog.strings["Save"].get_unit("ja").state == "translated"

    def test_retranslate_states(self, sample_catalog, make_client, echo):
        client = make_client(echo)
        stats = _synchronizer(client, languages=["de"], retranslate=["stale"]).sync_catalog(
            sample_catalog, lambda catalog: None
        )
        assert sample_catalog.strings["Save"].get_unit("de").value == "[German] Save"
        assert stats.accepted == 4

    def test_force(self, sample_catalog, make_client, echo):
        _synchronizer(make_client(echo), languages=["fr"], force=True).sync_catalog(
            sample_catalog, lambda catalog: None
        )
        unit = sample_catalog.strings["Hello %@, you have %d items"].get_unit("fr")
        assert unit.value == "[French] Hello %@, you have %d items"
        assert unit.state == "needs_review"

    def test_invalid_document_is_fatal(self, tmp_path, make_client, echo):
        path = tmp_path / "Broken.xcstrings"
        path.write_text('{"strings": {}}', encoding="utf-8")
        with pytest.raises(FormatError):
            _synchronizer(make_client(echo)).sync_file(path)

    def test_invalid_top_is_fatal(self, catalog_path, make_client, echo):
        with pytest.raises(ConfigError):
            _synchronizer(make_client(echo), top=1000).sync_file(catalog_path)

    def test_sync_files(self, tmp_path, sample_bytes, make_client, echo):
        paths = []
        for name in ("A.xcstrings", "B.xcstrings"):
            path = tmp_path / name
            path.write_bytes(sample_bytes)
            paths.append(path)

        stats = _synchronizer(make_client(echo), languages=["it"]).sync_files(paths)
        assert stats.accepted == 8
        for path in paths:
            assert _reload(path).strings["Save"].get_unit("it").value == "[Italian] Save"


class TestRetries:
    def test_exhaustion_leaves_catalog_untouched(self, sample_catalog, make_client, echo):
        persisted = []
        client = make_client(TransportError("connection refused"))
        synchronizer = _synchronizer(client, languages=["ja"], retries=5)

        stats = synchronizer.sync_catalog(sample_catalog, persisted.append)

        assert stats.exhausted == 4
        assert stats.attempts == 20
        assert len(client.prompts) == 20
        assert persisted == []
        assert all(entry.get_unit("ja") is None for entry in sample_catalog.strings.values())

    def test_failure_is_not_fatal_for_next_pair(self, sample_catalog, make_client, echo):
        # Cancel fails three times, the other terms succeed
        client = make_client(
            TransportError("down"), TransportError("down"), TransportError("down"), echo
        )
        stats = _synchronizer(client, languages=["ja"], retries=3).sync_catalog(
            sample_catalog, lambda catalog: None
        )
        assert stats.exhausted == 1
        assert stats.accepted == 3
        assert sample_catalog.strings["Cancel"].get_unit("ja") is None
        assert sample_catalog.strings["Save"].get_unit("ja").value == "[Japanese] Save"

    def test_retry_after_invalid_reply(self, make_client, echo, caplog):
        bad_echo = json.dumps({"English": "Save!", "French": "Enregistrer"})
        client = make_client("not json", bad_echo, echo)

        with caplog.at_level(logging.INFO, logger="xcsync"):
            result = _synchronizer(client).translate_pair("Save", "English", "French")

        assert isinstance(result, Accepted)
        assert result.translation.translation == "[French] Save"
        assert len(client.prompts) == 3
        assert "Error in attempt #1: not an object" in caplog.text
        assert "Error in attempt #2: source echo mismatch" in caplog.text

    def test_placeholder_mismatch_is_retried(self, make_client):
        term = "Hello %@, you have %d items"
        missing = json.dumps({"English": term, "French": "Bonjour, vous avez %d éléments"})
        client = make_client(missing)

        result = _synchronizer(client, retries=2).translate_pair(term, "English", "French")

        assert isinstance(result, Failed)
        assert result.error.reason == "placeholder count mismatch"
        assert result.error.token == "%@"
        assert len(client.prompts) == 2

    def test_explain_requires_explanation(self, make_client):
        reply = json.dumps({"English": "Save", "French": "Enregistrer"})
        explained = json.dumps({"English": "Save", "French": "Enregistrer", "explanation": "Verb"})
        client = make_client(reply, explained)

        result = _synchronizer(client, explain=True).translate_pair("Save", "English", "French")

        assert isinstance(result, Accepted)
        assert result.translation.explanation == "Verb"
        assert '"explanation"' in client.prompts[0]


class TestProgressOutput:
    def test_logs_every_step(self, sample_catalog, make_client, echo, caplog):
        with caplog.at_level(logging.INFO, logger="xcsync"):
            _synchronizer(make_client(echo), languages=["fr"], verbose=True).sync_catalog(
                sample_catalog, lambda catalog: None
            )

        assert "Translating terms:" in caplog.text
        assert 'Translating "Cancel" from English to French using test-model' in caplog.text
        assert "with context: “Greeting on the home screen”" not in caplog.text  # fr already done
        assert "Already translated fr: 'Hello %@, you have %d items'" in caplog.text
        assert "French (fr): [French] Cancel" in caplog.text
        assert "Response:" in caplog.text

    def test_context_is_sent(self, sample_catalog, make_client, echo):
        client = make_client(echo)
        _synchronizer(client, languages=["de"]).sync_catalog(sample_catalog, lambda catalog: None)
        hello_prompt = [p for p in client.prompts if '"Hello %@, you have %d items"' in p][0]
        assert "translation context: Greeting on the home screen" in hello_prompt


def _discard(catalog):
    pass


def test_pair_outcomes(sample_catalog, make_client, echo):
    synchronizer = _synchronizer(make_client(echo))
    persist = _discard
    assert synchronizer.sync_pair(sample_catalog, "Save", "de", "English", persist) is PairOutcome.SKIPPED
    assert synchronizer.sync_pair(sample_catalog, "Save", "fr", "English", persist) is PairOutcome.ACCEPTED
