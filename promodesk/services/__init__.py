"""
Business services for PromoDesk.
"""
