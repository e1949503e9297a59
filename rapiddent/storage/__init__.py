from .kv import JsonKeyValueStore, KeyValueStore, MemoryKeyValueStore, make_store

__all__ = ["KeyValueStore", "MemoryKeyValueStore", "JsonKeyValueStore", "make_store"]
