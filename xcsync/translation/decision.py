"""Decide whether a term needs translating into a language."""

import logging
from enum import Enum
from typing import Collection

from ..models.string_entry import StringEntry

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    SKIP = "skip"
    TRANSLATE = "translate"


def decide(
    entry: StringEntry,
    language: str,
    force: bool = False,
    retranslate_states: Collection[str] = (),
) -> Decision:
    """
    Decide what to do with one (term, language) pair.

    ``force`` always translates. Otherwise a missing localization or string
    unit is translated, and an existing unit is translated again only when
    its state is listed in ``retranslate_states``.
    """
    if force:
        return Decision.TRANSLATE

    unit = entry.get_unit(language)
    if unit is None:
        return Decision.TRANSLATE

    if unit.state in retranslate_states:
        logger.info(
            "Re-translating %s state %s: '%s': “%s”", language, unit.state, entry.key, unit.value
        )
        return Decision.TRANSLATE

    logger.info("Already translated %s: '%s': “%s”", language, entry.key, unit.value)
    return Decision.SKIP
