"""
Color Wars core Python package.

Pure game logic for the two Color Wars variants, kept apart from the Flask
app and the terminal CLI so it can be tested without either.
Modules:
- board.py: Player, Cell, ChainBoard, FloodBoard, Territories
- state.py: ChainState, FloodState, Variant
- chain.py / flood.py: move engines
- moves.py: variant-agnostic move API
- winner.py: terminal detection and score summaries
- ai.py: greedy one-ply bot
- deal.py: board seeding and new_game
- controller.py: live game holder with generation-tagged bot moves
- config.py: environment settings and logging setup
- cli.py: terminal play
"""
