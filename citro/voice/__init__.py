"""Voice command pipeline: normalizer, knowledge base, intents and templates."""
