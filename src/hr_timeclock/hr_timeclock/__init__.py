"""HR Time Clock package.

Organized by feature modules (timeclock, leave) with a thin Flask controller
layer over service/repository layers.
"""
