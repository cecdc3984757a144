"""
Pod Pruner - Kubernetes Pod and Job Pruner

A Python application that periodically scans Kubernetes namespaces and
deletes pods and jobs whose status matches the configured filters.
"""

__version__ = "1.0.0"
__author__ = "Pod Pruner Team"
