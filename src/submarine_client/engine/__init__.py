"""
Request execution engine: exceptions, lifecycle states and the executor.
"""
