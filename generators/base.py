"""Base generator class with a seeded RNG and shared helpers."""

import random
from typing import Any


class BaseGenerator:
    def __init__(self, config: dict[str, Any], seed: int = 42):
        self.config = config
        self.seed = seed
        self.rng = random.Random(seed)

    def _hex(self, length: int) -> str:
        """Deterministic lowercase hex string of the given length."""
        return f"{self.rng.getrandbits(length * 4):0{length}x}"

    def _tx_hash(self) -> str:
        return f"0x{self._hex(64)}"

    def _wallet(self) -> str:
        return f"0x{self._hex(40)}"

