#!/usr/bin/env python3
"""Minimal example running a few lookups for Berlin."""

from wikilookup import google_suggest, wiki_translate, wikidata_facts


def main():
    article = "de:Berlin"

    # These calls require network access to the Wikimedia and Google APIs.
    for language, title in wiki_translate(article, ["en", "fr", "it"]) or []:
        print(f"{language}: {title}")

    for label, value in (wikidata_facts(article) or [])[:10]:
        print(f"{label}: {value}")

    print(", ".join(google_suggest("berlin", "de") or []))


if __name__ == "__main__":
    main()
