"""
API blueprints for PromoDesk.
"""
