"""Classification of appliance output into canonical error kinds.

The appliance CLI reports failures as free-form text on a zero exit status,
so the output of every command is matched against an ordered rule table.
The first matching rule wins; several triggers can appear in the same
message, which makes rule order part of the contract.

Rule sets are versioned data. A new wording from the appliance is handled
by adding a rule (or a new rule set), not by touching ``classify``.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pancli.errors import ErrorKind, PancliError, error_for

logger = logging.getLogger(__name__)

Normalizer = Callable[[str], str]


@dataclass(frozen=True)
class Rule:
    """One classification rule.

    Attributes:
        triggers: Lower-case substrings; any of them matches
        kind: Resulting error kind, or None for success
        normalize: Optional rewrite of the message attached to the error
    """

    triggers: tuple[str, ...]
    kind: ErrorKind | None
    normalize: Normalizer | None = None

    def matches(self, lowered: str) -> bool:
        return any(trigger in lowered for trigger in self.triggers)


# Trailing help sentence printed after usage errors
HELP_LINE = re.compile(r'\s*Use the command "[^"]*" to get more help\.?\s*$')

# Trailing option fragment left after "must be one of" lists
TRAILING_FORCE_FLAG = re.compile(r",\s*-f\.$")


@dataclass(frozen=True)
class MessageNormalizer:
    """Collapse a multi-line usage error into one readable sentence.

    Non-breaking spaces become spaces, whitespace runs collapse, the
    trailing noise patterns are removed in order and the first letter is
    capitalized. An empty result falls back to the original text.
    """

    trailing_noise: tuple[re.Pattern[str], ...] = (HELP_LINE, TRAILING_FORCE_FLAG)

    def __call__(self, message: str) -> str:
        clean = message.replace("\u00a0", " ")
        clean = " ".join(clean.split())

        for pattern in self.trailing_noise:
            clean = pattern.sub("", clean)

        clean = clean.strip()
        if not clean:
            return message

        return clean[0].upper() + clean[1:]


normalize_usage_error = MessageNormalizer()

PANCLI_RULES_V1: tuple[Rule, ...] = (
    Rule(("already exists",), ErrorKind.ALREADY_EXISTS),
    Rule(("no volume with name",), ErrorKind.NOT_FOUND),
    Rule(("successfully",), None),
    Rule(("<volumes>",), None),
    Rule(("do not exist",), ErrorKind.NOT_FOUND),
    Rule(
        ("must be one of", "invalid string"),
        ErrorKind.INVALID_ARGUMENT,
        normalize_usage_error,
    ),
    Rule(("should be",), ErrorKind.INVALID_ARGUMENT),
    Rule(("status 255",), ErrorKind.UNAVAILABLE),
)

DEFAULT_RULES = PANCLI_RULES_V1


class ErrorClassifier:
    """Ordered, first-match-wins classifier over appliance output.

    Output matching no rule is classified as ``fallback`` so unrecognized
    text is never treated as success.

    Example:
        >>> ErrorClassifier().classify("Volume created successfully") is None
        True
        >>> ErrorClassifier().classify("volume already exists").kind
        <ErrorKind.ALREADY_EXISTS: 'already_exists'>
    """

    def __init__(
        self,
        rules: Sequence[Rule] = DEFAULT_RULES,
        fallback: ErrorKind = ErrorKind.INTERNAL,
    ) -> None:
        self.rules = tuple(rules)
        self.fallback = fallback

    def classify(self, output: str | bytes) -> PancliError | None:
        """Classify raw command output.

        Args:
            output: Raw text or bytes returned by the appliance

        Returns:
            None when the output reports success, otherwise the (unraised)
            error carrying the original or normalized message
        """
        if isinstance(output, bytes):
            text = output.decode("utf-8", errors="replace")
        else:
            text = output

        lowered = text.lower()
        for rule in self.rules:
            if not rule.matches(lowered):
                continue
            if rule.kind is None:
                return None
            message = rule.normalize(text) if rule.normalize else text
            logger.debug("Output classified as %s: %r", rule.kind.value, message)
            return error_for(rule.kind, message)

        logger.debug("Unrecognized output classified as %s: %r", self.fallback.value, text)
        return error_for(self.fallback, text)


_default_classifier = ErrorClassifier()


def classify(output: str | bytes) -> PancliError | None:
    """Classify output with the default rule set."""
    return _default_classifier.classify(output)
