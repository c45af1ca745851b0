"""Progress tracker for categorized training rooms backed by Supabase."""

__version__ = "1.0.0"
