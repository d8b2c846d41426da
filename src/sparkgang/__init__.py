"""sparkgang: gang-scheduling task groups for Spark applications on Kubernetes."""

__version__ = "0.1.0"
