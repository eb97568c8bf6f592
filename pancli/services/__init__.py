"""Services for pancli."""

from pancli.services.classifier import (
    DEFAULT_RULES,
    PANCLI_RULES_V1,
    ErrorClassifier,
    MessageNormalizer,
    Rule,
    classify,
)
from pancli.services.client import PancliClient
from pancli.services.decoder import parse_volume_list
from pancli.services.executor import CommandExecutor
from pancli.services.pool import ConnectionPool
from pancli.services.session import SSHSession, open_ssh_session

__all__ = [
    "DEFAULT_RULES",
    "PANCLI_RULES_V1",
    "CommandExecutor",
    "ConnectionPool",
    "ErrorClassifier",
    "MessageNormalizer",
    "PancliClient",
    "Rule",
    "SSHSession",
    "classify",
    "open_ssh_session",
    "parse_volume_list",
]
