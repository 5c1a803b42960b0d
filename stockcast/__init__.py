"""Demand forecasting and inventory recommendation core."""
