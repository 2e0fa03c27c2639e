"""
Storage module
Pluggable persistence backends behind one interface
"""
from .base import Storage
from .memory import MemoryStorage
from .json_file import JsonFileStorage
from .supabase import SupabaseStorage

__all__ = ['Storage', 'MemoryStorage', 'JsonFileStorage', 'SupabaseStorage']
