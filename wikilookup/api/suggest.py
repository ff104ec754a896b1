"""Google Suggest client (toolbar XML output)."""

from typing import List, Optional

from .base import ApiClient, attribute


class SuggestClient(ApiClient):
    """Client for Google's autocomplete endpoint."""

    def suggestions(self, keyword: str, language: Optional[str] = None) -> List[str]:
        """Autocomplete suggestions for ``keyword`` in server order."""
        params = {
            "output": "toolbar",
            "hl": language or self.config.suggest_language,
            "q": keyword,
        }
        root = self.get_xml(self.config.suggest_url, params)

        results = []
        for entry in root.findall("CompleteSuggestion"):
            suggestion = entry.find("suggestion")
            if suggestion is not None:
                results.append(attribute(suggestion, "data"))
        return results
