"""
Hand Bounce Package
===================

Core simulation for a hand-tracked ball-juggling game: balls fall under
gravity and the player keeps them airborne by deflecting them with tracked
hand positions. Score is survival time in whole seconds.

The package controls:

- Ball dynamics and wall bounces
- Hand-zone collision resolution
- Periodic ball spawning
- Round state (countdown, play, game over)
- Survival scoring

All tunable parameters live in game_config.yaml.
"""
