"""
Generated Contract Bindings
"""
