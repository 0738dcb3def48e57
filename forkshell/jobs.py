import logging
import os
from typing import Dict, List

from forkshell.ast_tree import Job

logger = logging.getLogger(__name__)


class BackgroundJobRegistry:
    """
    Detached children whose termination has not been observed yet.

    Owned by the shell loop and only touched from its thread.
    """

    def __init__(self) -> None:
        self.jobs: Dict[int, Job] = {}
        self.current_job_id = 1

    def register(self, pid: int, cmd: str = "") -> Job:
        job = Job(pid, cmd, self.current_job_id)
        self.jobs[pid] = job
        self.current_job_id += 1
        logger.debug("registered %r", job)
        return job

    def reap_all(self) -> List[Job]:
        """
        Collect every terminated child without blocking.

        Any child of the process is reaped, registered or not. Returns the
        registered jobs that were found finished.
        """
        finished = []
        while True:
            try:
                pid, status = os.waitpid(-1, os.WNOHANG)
            except ChildProcessError:
                break
            if pid == 0:
                break

            job = self.jobs.pop(pid, None)
            if job is None:
                logger.debug("reaped unregistered child %d (status %d)", pid, status)
                continue
            job.status = "done"
            finished.append(job)
            logger.debug("reaped %r, exit code %d", job, os.waitstatus_to_exitcode(status))
        return finished

    def pids(self) -> List[int]:
        return list(self.jobs)

    def __len__(self) -> int:
        return len(self.jobs)

    def __contains__(self, pid: int) -> bool:
        return pid in self.jobs
