"""RiftCounter - Wild Rift matchup and build recommendation engine."""

__version__ = "0.1.0"
