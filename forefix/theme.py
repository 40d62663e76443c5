"""Light/dark display theme, persisted between runs."""

from __future__ import annotations

from .storage import Repository

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


def current_theme(repository: Repository, preferred: str = LIGHT) -> str:
    saved = repository.theme()
    if saved in THEMES:
        return saved
    return preferred if preferred in THEMES else LIGHT


def toggle_theme(repository: Repository, preferred: str = LIGHT) -> str:
    new_theme = LIGHT if current_theme(repository, preferred) == DARK else DARK
    repository.save_theme(new_theme)
    return new_theme
