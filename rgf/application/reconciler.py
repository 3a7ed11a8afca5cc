"""Application service reconciling forks with the remotes of a local repository."""

import logging
from typing import Iterable, List, Optional, Sequence

from rgf.domain.actions import ActionKind, ReconcileAction, ReconcileMode, summarize
from rgf.domain.fork import Fork, is_managed_remote
from rgf.infrastructure.git_remotes import GitRemoteStore, RemoteCreateError

logger = logging.getLogger(__name__)


class ForkReconciler:
    """Decides, and when applying performs, one remote addition per missing fork."""

    def __init__(self, remote_store: Optional[GitRemoteStore]):
        """
        Initialize reconciler.

        Args:
            remote_store: Remote store of the local repository, None for list-only runs
        """
        self.remote_store = remote_store

    def run(self, forks: Sequence[Fork], mode: ReconcileMode) -> List[ReconcileAction]:
        """
        Reconcile forks against the remotes present right now.

        The remote list is read once; LIST_ONLY does not read it at all.
        """
        existing: List[str] = []
        if mode is not ReconcileMode.LIST_ONLY:
            existing = self.remote_store.list_remote_names()
            managed = sum(1 for name in existing if is_managed_remote(name))
            logger.info(f"Repository has {len(existing)} remotes ({managed} managed by rgf)")
        return self.reconcile(forks, existing, mode)

    def reconcile(
        self,
        forks: Sequence[Fork],
        existing_remotes: Iterable[str],
        mode: ReconcileMode,
    ) -> List[ReconcileAction]:
        """
        Compute one action per fork, in fork order.

        Args:
            forks: Forks as fetched, newest first
            existing_remotes: Remote names present before the run
            mode: LIST_ONLY reports, DRY_RUN only plans, APPLY adds remotes

        Returns:
            Actions in the same order as `forks`
        """
        # Grows with names planned or added in this run, so a later fork with
        # the same derived name is skipped instead of failing in git
        known = set(existing_remotes)
        actions: List[ReconcileAction] = []

        for fork in forks:
            if mode is ReconcileMode.LIST_ONLY:
                actions.append(ReconcileAction(
                    ActionKind.REPORTED, fork.full_name, forks_count=fork.forks_count,
                ))
                continue

            remote_name = fork.remote_name

            # Existing remotes are left alone even if their URL is stale
            if remote_name in known:
                actions.append(ReconcileAction(ActionKind.SKIPPED, fork.full_name, remote_name))
                continue

            if mode is ReconcileMode.DRY_RUN:
                actions.append(ReconcileAction(ActionKind.WOULD_ADD, fork.full_name, remote_name))
                known.add(remote_name)
                continue

            try:
                self.remote_store.create_remote(remote_name, fork.clone_url)
            except RemoteCreateError as e:
                actions.append(ReconcileAction(
                    ActionKind.ADD_FAILED, fork.full_name, remote_name, reason=e.reason,
                ))
                continue

            known.add(remote_name)
            actions.append(ReconcileAction(ActionKind.ADDED, fork.full_name, remote_name))

        counts = summarize(actions)
        logger.info(
            f"Reconciled {len(actions)} forks ({mode.value}): "
            + ", ".join(f"{kind.value}={count}" for kind, count in counts.items())
        )
        if counts.get(ActionKind.ADD_FAILED):
            logger.warning(f"{counts[ActionKind.ADD_FAILED]} remotes could not be added")
        return actions
