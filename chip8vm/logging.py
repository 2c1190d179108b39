"""Console logging utilities for the CHIP-8 engine.

The engine reports unrecognized instructions and ROM loading through a
module-level :data:`logger`, and can trace every executed instruction at
DEBUG level. Batch runs can display a tqdm progress bar.
"""

import time
import sys
from typing import Iterable, Optional

from tqdm import tqdm


class ConsoleLogger:
    """Levelled console logger with optional colors and timestamps."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        level = log_level.upper()
        if level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order)}"
            )
        self.log_level = level

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


logger = ConsoleLogger("chip8vm", log_level="INFO")


def set_log_level(log_level: str):
    """Set the threshold of the engine logger."""
    logger.set_level(log_level)


def trace_instruction(pc: int, instruction: int, text: str):
    """Log one executed instruction at DEBUG level."""
    logger.debug(f"0x{pc:03X}: {instruction:04X}  {text}")


def cycle_progress(
    n: int,
    show_progress: bool = False,
    desc: Optional[str] = None,
    **kwargs,
) -> Iterable[int]:
    """Iterate over ``n`` cycle indices, optionally behind a tqdm bar."""
    if not show_progress:
        return range(n)

    if desc is None:
        desc = f"Running ({n:,} cycles)"

    for kwarg in ("total", "iterable"):
        kwargs.pop(kwarg, None)

    return tqdm(range(n), desc=desc, unit="cycle", **kwargs)
