"""GreenHaven storefront client"""
