"""Domain layer — the duration engine.

Parser → Normalizer → Arithmetic/Formatter, as pure functions over frozen
value types. This layer depends only on the standard library and must
never import from services, commands, config, or output.
"""
