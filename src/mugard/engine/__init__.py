"""Game engine: world model, parser, resolver, commands and events."""
