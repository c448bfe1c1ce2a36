"""
lxc-creator - interactive LXC container provisioning for Proxmox VE
"""

__version__ = "1.0.0"

from .core import ContainerCreator
from .errors import CreatorError

__all__ = ["ContainerCreator", "CreatorError"]
