"""
Shared helpers: exceptions, handler decorators and NEAR amount math.
"""
