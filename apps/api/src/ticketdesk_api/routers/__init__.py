# API routers package
from . import milestones, resources, workload

__all__ = ["milestones", "resources", "workload"]
