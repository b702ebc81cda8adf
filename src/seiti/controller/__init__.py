"""
The CONTROLLER layer drives state changes: board service requests and the
replay choreography.
"""
