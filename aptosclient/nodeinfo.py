"""Blockchain state reported by a node."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .util import str_to_uint64

logger = logging.getLogger(__name__)


@dataclass
class NodeInfo:
    """State of the chain as seen by a node; numeric fields arrive as strings."""

    chain_id: int = 0
    epoch_str: str = ""
    ledger_timestamp_str: str = ""
    ledger_version_str: str = ""
    oldest_ledger_version_str: str = ""
    node_role: str = ""
    block_height_str: str = ""
    oldest_block_height_str: str = ""
    git_hash: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "NodeInfo":
        return cls(
            chain_id=int(data.get("chain_id", 0)),
            epoch_str=data.get("epoch", ""),
            ledger_timestamp_str=data.get("ledger_timestamp", ""),
            ledger_version_str=data.get("ledger_version", ""),
            oldest_ledger_version_str=data.get("oldest_ledger_version", ""),
            node_role=data.get("node_role", ""),
            block_height_str=data.get("block_height", ""),
            oldest_block_height_str=data.get("oldest_block_height", ""),
            git_hash=data.get("git_hash", ""),
        )

    @staticmethod
    def _parse(name: str, text: str) -> int:
        try:
            return str_to_uint64(text)
        except ValueError as exc:
            logger.error("bad %s v=%r err=%s", name, text, exc)
            return 0

    def epoch(self) -> int:
        """Current epoch, or 0 if the reported value is malformed."""
        return self._parse("epoch", self.epoch_str)

    def ledger_timestamp(self) -> int:
        return self._parse("ledger_timestamp", self.ledger_timestamp_str)

    def ledger_version(self) -> int:
        return self._parse("ledger_version", self.ledger_version_str)

    def oldest_ledger_version(self) -> int:
        return self._parse("oldest_ledger_version", self.oldest_ledger_version_str)

    def block_height(self) -> int:
        return self._parse("block_height", self.block_height_str)

    def oldest_block_height(self) -> int:
        return self._parse("oldest_block_height", self.oldest_block_height_str)