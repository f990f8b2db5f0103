from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigError

# ------------- CONFIG -------------
DEFAULT_CONCURRENCY = 50                        # links checked simultaneously
DEFAULT_TIMEOUT = 5.0                           # seconds, per request
DEFAULT_USER_AGENT = "VLC/3.0.x LibVLC/3.0.x"
DEFAULT_MAX_REDIRECTS = 30
DEFAULT_ENGINE = "threads"
ENGINES = ("threads", "async")
# ----------------------------------


@dataclass(frozen=True)
class CleanerConfig:
    input_path: Path
    output_path: Optional[Path] = None
    concurrency: int = DEFAULT_CONCURRENCY
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    keep_server_errors: bool = False
    ignore_case: bool = False
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    engine: str = DEFAULT_ENGINE
    rejects_path: Optional[Path] = None
    dry_run: bool = False

    def __post_init__(self):
        # accept plain strings for the paths
        object.__setattr__(self, "input_path", Path(self.input_path))
        if self.output_path is not None:
            object.__setattr__(self, "output_path", Path(self.output_path))
        if self.rejects_path is not None:
            object.__setattr__(self, "rejects_path", Path(self.rejects_path))

        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ConfigError(f"concurrency must be a positive integer, got {self.concurrency!r}")
        if not (self.timeout > 0):
            raise ConfigError(f"timeout must be a positive number, got {self.timeout!r}")
        if not isinstance(self.max_redirects, int) or self.max_redirects < 1:
            raise ConfigError(f"max_redirects must be a positive integer, got {self.max_redirects!r}")
        if self.engine not in ENGINES:
            raise ConfigError(f"engine must be one of {', '.join(ENGINES)}, got {self.engine!r}")
        if not self.user_agent or not self.user_agent.strip():
            raise ConfigError("user_agent must not be empty")

    @property
    def target_path(self) -> Path:
        """Where the cleaned playlist goes: the explicit output, else the input itself."""
        return self.output_path if self.output_path is not None else self.input_path
