import unittest

from rgf.application.reconciler import ForkReconciler
from rgf.domain.actions import ActionKind, ReconcileMode
from rgf.domain.fork import Fork
from rgf.infrastructure.git_remotes import RemoteCreateError


def make_fork(full_name: str, forks_count: int = 0) -> Fork:
    return Fork(
        full_name=full_name,
        clone_url=f"https://github.com/{full_name}.git",
        forks_count=forks_count,
    )


class FakeRemoteStore:
    def __init__(self, remotes=None):
        self.remotes: dict[str, str] = dict(remotes or {})
        self.list_calls = 0
        self.created: list[tuple[str, str]] = []
        self.reject: set[str] = set()

    def list_remote_names(self):
        self.list_calls += 1
        return list(self.remotes)

    def create_remote(self, name: str, url: str):
        if name in self.reject or name in self.remotes:
            raise RemoteCreateError(name, f"remote {name} rejected")
        self.created.append((name, url))
        self.remotes[name] = url


class ForkReconcilerTests(unittest.TestCase):
    def setUp(self):
        self.store = FakeRemoteStore({
            "origin": "https://github.com/acme/widgets.git",
            "rgf__acme_fork1": "https://github.com/acme/fork1.git",
        })
        self.reconciler = ForkReconciler(self.store)
        self.forks = [make_fork("acme/fork1", 0), make_fork("acme/fork2", 2)]

    def test_apply_skips_existing_and_adds_missing(self):
        actions = self.reconciler.run(self.forks, ReconcileMode.APPLY)

        self.assertEqual(
            [(a.kind, a.remote_name) for a in actions],
            [(ActionKind.SKIPPED, "rgf__acme_fork1"), (ActionKind.ADDED, "rgf__acme_fork2")],
        )
        self.assertEqual(self.store.created, [("rgf__acme_fork2", "https://github.com/acme/fork2.git")])

    def test_dry_run_reports_without_mutation(self):
        before = self.store.list_remote_names()

        actions = self.reconciler.run(self.forks, ReconcileMode.DRY_RUN)

        self.assertEqual(
            [(a.kind, a.remote_name) for a in actions],
            [(ActionKind.SKIPPED, "rgf__acme_fork1"), (ActionKind.WOULD_ADD, "rgf__acme_fork2")],
        )
        self.assertEqual(self.store.created, [])
        self.assertEqual(self.store.list_remote_names(), before)

    def test_list_only_never_touches_store(self):
        actions = self.reconciler.run(self.forks, ReconcileMode.LIST_ONLY)

        self.assertEqual(
            [a.describe() for a in actions],
            ["acme/fork1 | 0", "acme/fork2 | 2"],
        )
        self.assertEqual(self.store.list_calls, 0)
        self.assertEqual(self.store.created, [])

    def test_second_apply_run_is_idempotent(self):
        self.reconciler.run(self.forks, ReconcileMode.APPLY)
        actions = self.reconciler.run(self.forks, ReconcileMode.APPLY)

        self.assertTrue(all(a.kind is ActionKind.SKIPPED for a in actions))
        self.assertEqual(len(self.store.created), 1)

    def test_preserves_fork_order(self):
        forks = [make_fork("zed/widgets"), make_fork("acme/fork1"), make_fork("bob/widgets")]

        actions = self.reconciler.run(forks, ReconcileMode.APPLY)

        self.assertEqual([a.full_name for a in actions], ["zed/widgets", "acme/fork1", "bob/widgets"])

    def test_add_failure_is_recorded_and_batch_continues(self):
        self.store.reject.add("rgf__bad_widgets")
        forks = [make_fork("bad/widgets"), make_fork("good/widgets")]

        actions = self.reconciler.run(forks, ReconcileMode.APPLY)

        self.assertEqual(actions[0].kind, ActionKind.ADD_FAILED)
        self.assertEqual(actions[0].reason, "remote rgf__bad_widgets rejected")
        self.assertEqual(actions[1].kind, ActionKind.ADDED)
        self.assertEqual(self.store.created, [("rgf__good_widgets", "https://github.com/good/widgets.git")])

    def test_existing_remote_with_other_url_is_not_overwritten(self):
        self.store.remotes["rgf__acme_fork1"] = "https://example.com/stale.git"

        actions = self.reconciler.run([make_fork("acme/fork1")], ReconcileMode.APPLY)

        self.assertEqual(actions[0].kind, ActionKind.SKIPPED)
        self.assertEqual(self.store.remotes["rgf__acme_fork1"], "https://example.com/stale.git")

    def test_reads_remote_list_once_per_run(self):
        self.reconciler.run(self.forks, ReconcileMode.APPLY)
        self.assertEqual(self.store.list_calls, 1)

    def test_reconcile_with_explicit_remote_set(self):
        actions = self.reconciler.reconcile(self.forks, set(), ReconcileMode.DRY_RUN)
        self.assertEqual([a.kind for a in actions], [ActionKind.WOULD_ADD, ActionKind.WOULD_ADD])

    def test_second_fork_with_same_remote_name_is_skipped(self):
        forks = [make_fork("a/b_c"), make_fork("a_b/c")]

        actions = self.reconciler.run(forks, ReconcileMode.APPLY)

        self.assertEqual([a.kind for a in actions], [ActionKind.ADDED, ActionKind.SKIPPED])
        self.assertEqual([a.remote_name for a in actions], ["rgf__a_b_c", "rgf__a_b_c"])
        self.assertEqual(self.store.created, [("rgf__a_b_c", "https://github.com/a/b_c.git")])

    def test_empty_page_yields_no_actions(self):
        self.assertEqual(self.reconciler.run([], ReconcileMode.APPLY), [])


if __name__ == "__main__":
    unittest.main()
