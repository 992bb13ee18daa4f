"""Votus - 候補者得票分析."""
