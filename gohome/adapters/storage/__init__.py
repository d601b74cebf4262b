from gohome.adapters.storage.json_store import TeamStore

__all__ = ["TeamStore"]
