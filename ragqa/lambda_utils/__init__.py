"""
Lambda event parsing, response building and secret resolution helpers.
"""
