"""Client-side graph assembly and query layer for the user/transaction dashboard."""
