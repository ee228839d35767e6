"""Utility functions for the ECommerce Application Operator."""
