"""Expense resource."""
