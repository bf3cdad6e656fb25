"""Identity backend - возвращает текст без изменений (сухие прогоны в CI)."""

from .base import TranslationBackend


class IdentityBackend(TranslationBackend):
    name = "identity"

    def translate(self, text: str, source_tag: str, target_tag: str) -> str:
        return text
