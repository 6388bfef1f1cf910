"""
dxlauncher - run the dxclient tool inside a container.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

__version__ = "1.0.0"
