"""
fuse_jobs – background job scheduler and trigger engines.

Import path convention::

    from fuse_jobs.application.scheduler import JobDefinition, SchedulerLoop
    from fuse_jobs.application.engines import AbandonedCheckoutService
    from fuse_jobs.bootstrap import build_scheduler
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
