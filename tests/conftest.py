import json
import logging
import re

import pytest

from xcsync.config import SyncOptions
from xcsync.extraction.xcstrings_parser import XCStringsParser

SAMPLE_CATALOG = """{
  "sourceLanguage" : "en",
  "strings" : {
    "Cancel" : {

    },
    "Hello %@, you have %d items" : {
      "comment" : "Greeting on the home screen",
      "extractionState" : "manual",
      "localizations" : {
        "en" : {
          "stringUnit" : {
            "state" : "translated",
            "value" : "Hello %@, you have %d items"
          }
        },
        "fr" : {
          "stringUnit" : {
            "state" : "translated",
            "value" : "Bonjour %@, vous avez %d éléments"
          }
        }
      }
    },
    "Open https://example.com/help" : {
      "localizations" : {
        "de" : {
          "variations" : {
            "plural" : {
              "one" : {
                "stringUnit" : {
                  "state" : "translated",
                  "value" : "Öffne https://example.com/help"
                }
              },
              "other" : {
                "stringUnit" : {
                  "state" : "translated",
                  "value" : "Öffnen Sie https://example.com/help"
                }
              }
            }
          }
        }
      }
    },
    "Save" : {
      "localizations" : {
        "de" : {
          "stringUnit" : {
            "state" : "stale",
            "value" : "Speichern"
          }
        }
      },
      "shouldTranslate" : true
    }
  },
  "version" : "1.0"
}"""

_PROMPT_TERM = re.compile(r'from (?P<source>.+?) to (?P<target>.+?): "(?P<term>.*)"\n')


class FakeClient:
    """Stands in for OllamaClient; replies are strings, exceptions or callables."""

    model = "test-model"

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


def echo_translation(prompt):
    """Reply with a valid translation that keeps every placeholder of the term."""
    match = _PROMPT_TERM.search(prompt)
    source, target, term = match.group("source"), match.group("target"), match.group("term")
    return json.dumps({source: term, target: f"[{target}] {term}"})


@pytest.fixture
def sample_bytes():
    return SAMPLE_CATALOG.encode("utf-8")


@pytest.fixture
def sample_catalog(sample_bytes):
    return XCStringsParser().load(sample_bytes)


@pytest.fixture
def catalog_path(tmp_path, sample_bytes):
    path = tmp_path / "Localizable.xcstrings"
    path.write_bytes(sample_bytes)
    return path


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def echo():
    return echo_translation


@pytest.fixture
def options():
    return SyncOptions(model="test-model", retries=3)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI detaches the package logger from root; undo that between tests."""
    yield
    logger = logging.getLogger("xcsync")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Make every test read the environment again."""
    monkeypatch.setattr("xcsync.config._config", None)
