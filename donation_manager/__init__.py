"""Donation management API: donors, donations, campaigns and their analytics."""
