"""Terminal front end for Tag Pairing."""

from tagpairing.console.adapters import ConsoleNotifier, PromptConfirmer

__all__ = ["ConsoleNotifier", "PromptConfirmer"]
