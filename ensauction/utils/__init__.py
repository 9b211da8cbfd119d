"""Utility helpers: logging, input validation, amount units"""
