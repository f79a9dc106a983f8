"""GreenHaven storefront cart API"""
