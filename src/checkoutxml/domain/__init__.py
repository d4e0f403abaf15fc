"""Domain layer: value types, cart entities, commands, and notifications."""
