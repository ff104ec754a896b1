"""API clients for Wikipedia, Wikidata, pageviews and Google Suggest."""
