"""Curated static datasets: routes, holidays, destinations and airports."""
