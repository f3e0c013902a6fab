"""
Billtrack Modules - Black Box Architecture

Each module is a self-contained black box with:
- Clear interface (public API)
- Hidden implementation details
- Single responsibility

The billing, lifecycle and view modules are pure functions of their inputs.
Only the session module performs I/O.
"""
