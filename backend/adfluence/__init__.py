"""Adfluence: brand and influencer sponsorship marketplace API."""
