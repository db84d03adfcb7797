from backend.engine.gamestate.state import World

__all__ = ["World"]
