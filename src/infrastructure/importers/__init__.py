"""選挙データソースの実装."""
