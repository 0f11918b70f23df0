# settings/config.py
from __future__ import annotations
from dataclasses import dataclass, replace
from pathlib import Path
import os

POLICIES = ("legacy", "strict")


def _str2bool(v: str | None, default: bool) -> bool:
    if v is None:
        return default
    s = v.strip().lower()
    if s in ("1", "true", "t", "yes", "y", "on"):
        return True
    if s in ("0", "false", "f", "no", "n", "off"):
        return False
    return default


@dataclass(frozen=True)
class StoreConfig:
    """
    Knobs for one RecordStore.

    policy:
      - "legacy": add/remove/find log and return on a missing file,
        edit raises, get_all logs and returns [].
      - "strict": every operation raises its StoreError.
    """
    policy: str = "legacy"
    indent: int = 2
    atomic_writes: bool = True
    edit_delay: float = 0.5
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.policy not in POLICIES:
            raise ValueError(f"policy must be one of {POLICIES}, got {self.policy!r}")
        if self.indent < 0:
            raise ValueError("indent must be >= 0")
        if self.edit_delay < 0:
            raise ValueError("edit_delay must be >= 0")

    @property
    def strict(self) -> bool:
        return self.policy == "strict"

    @classmethod
    def load(cls) -> "StoreConfig":
        """Build a config from JSONTABLE_* environment variables; bad values fall back to defaults."""
        defaults = cls()

        def env_int(var: str, default: int) -> int:
            try:
                v = int(os.getenv(var, ""))
            except ValueError:
                return default
            return v if v >= 0 else default

        def env_float(var: str, default: float) -> float:
            try:
                v = float(os.getenv(var, ""))
            except ValueError:
                return default
            return v if v >= 0 else default

        policy = (os.getenv("JSONTABLE_POLICY") or defaults.policy).strip().lower()
        if policy not in POLICIES:
            policy = defaults.policy

        log_dir = None
        raw_dir = os.getenv("JSONTABLE_LOG_DIR")
        if raw_dir:
            log_dir = Path(raw_dir).expanduser()

        return cls(
            policy=policy,
            indent=env_int("JSONTABLE_INDENT", defaults.indent),
            atomic_writes=_str2bool(os.getenv("JSONTABLE_ATOMIC_WRITES"), defaults.atomic_writes),
            edit_delay=env_float("JSONTABLE_EDIT_DELAY", defaults.edit_delay),
            log_dir=log_dir,
        )

    def with_policy(self, policy: str) -> "StoreConfig":
        return replace(self, policy=policy)

    def pretty_lines(self) -> list[str]:
        return [
            "Resolved configuration:",
            f"policy         : {self.policy}",
            f"indent         : {self.indent}",
            f"atomic_writes  : {self.atomic_writes}",
            f"edit_delay     : {self.edit_delay}",
            f"log_dir        : {self.log_dir if self.log_dir is not None else '(disabled)'}",
        ]
