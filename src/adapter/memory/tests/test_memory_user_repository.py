"""Unit tests for InMemoryUserRepository — verifies Port contract compliance."""

import threading
import unittest

from adapter.memory.user_repository import InMemoryUserRepository
from domain.model.user import User


class TestInMemoryUserRepository(unittest.TestCase):
    """Tests that InMemoryUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = InMemoryUserRepository()
        self.user = User(id='user-1', name='Ada', email='ada@x.com')

    # ── insert + get (round-trip) ─────────────────────────────

    def test_insert_and_get(self):
        self.repo.insert(self.user)

        found = self.repo.get('user-1')
        self.assertEqual(found, self.user)

    def test_get_returns_none_for_missing(self):
        self.assertIsNone(self.repo.get('nonexistent'))

    def test_insert_overwrites_existing_id(self):
        self.repo.insert(self.user)
        self.repo.insert(User(id='user-1', name='Grace', email='grace@x.com'))

        self.assertEqual(len(self.repo), 1)
        self.assertEqual(self.repo.get('user-1').name, 'Grace')

    def test_returned_records_are_copies(self):
        """Mutating a returned record must not touch the store."""
        self.repo.insert(self.user)
        self.user.name = 'changed after insert'

        found = self.repo.get('user-1')
        found.name = 'changed after get'

        self.assertEqual(self.repo.get('user-1').name, 'Ada')

    # ── list ──────────────────────────────────────────────────

    def test_list_empty(self):
        self.assertEqual(self.repo.list(), [])

    def test_list_returns_all_in_insertion_order(self):
        self.repo.insert(User(id='id1', name='A', email='a@x.com'))
        self.repo.insert(User(id='id2', name='B', email='b@x.com'))

        self.assertEqual([u.id for u in self.repo.list()], ['id1', 'id2'])

    # ── update ────────────────────────────────────────────────

    def test_update_applies_only_given_fields(self):
        self.repo.insert(self.user)

        updated = self.repo.update('user-1', {'email': 'b@x.com'})

        self.assertEqual(updated, User(id='user-1', name='Ada', email='b@x.com'))
        self.assertEqual(self.repo.get('user-1').email, 'b@x.com')

    def test_update_ignores_none_and_unknown_fields(self):
        self.repo.insert(self.user)

        updated = self.repo.update('user-1', {'name': None, 'id': 'other', 'role': 'admin'})

        self.assertEqual(updated, self.user)
        self.assertIsNone(self.repo.get('other'))

    def test_update_accepts_empty_string(self):
        self.repo.insert(self.user)

        updated = self.repo.update('user-1', {'name': ''})

        self.assertEqual(updated.name, '')

    def test_update_returns_none_for_missing(self):
        self.assertIsNone(self.repo.update('nonexistent', {'name': 'B'}))
        self.assertEqual(len(self.repo), 0)

    # ── delete ────────────────────────────────────────────────

    def test_delete_existing(self):
        self.repo.insert(self.user)

        self.assertTrue(self.repo.delete('user-1'))
        self.assertIsNone(self.repo.get('user-1'))

    def test_delete_missing_returns_false(self):
        self.assertFalse(self.repo.delete('nonexistent'))

    def test_delete_twice(self):
        self.repo.insert(self.user)

        self.assertTrue(self.repo.delete('user-1'))
        self.assertFalse(self.repo.delete('user-1'))

    # ── concurrency ───────────────────────────────────────────

    def test_concurrent_inserts_are_not_lost(self):
        def insert_many(prefix: str):
            for i in range(200):
                self.repo.insert(User(id=f'{prefix}-{i}', name='n', email='e'))

        threads = [threading.Thread(target=insert_many, args=(f't{n}',)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(self.repo), 8 * 200)

    def test_concurrent_list_during_inserts(self):
        """Listing while other threads insert never fails on a changing dict."""
        errors = []

        def writer():
            for i in range(500):
                self.repo.insert(User(id=f'w-{i}', name='n', email='e'))

        def reader():
            try:
                for _ in range(200):
                    self.repo.list()
            except RuntimeError as e:
                errors.append(e)

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])


if __name__ == '__main__':
    unittest.main()
