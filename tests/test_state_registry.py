import asyncio
import unittest

from modmanager.storage.models import ModState
from modmanager.storage.state import ModStateRegistry


class TestModStateRegistry(unittest.IsolatedAsyncioTestCase):
    async def test_unseen_id_is_downloadable(self):
        states = ModStateRegistry()
        self.assertEqual(states.get_state("sodium"), ModState.DOWNLOADABLE)

    async def test_catalog_id_collision_replaces_entry(self):
        states = ModStateRegistry()
        await states.set_state("a", "x", ModState.INSTALLED)
        await states.set_state("b", "x", ModState.OUTDATED)

        self.assertEqual(len(states), 1)
        self.assertEqual(states.get_state("x"), ModState.OUTDATED)
        self.assertEqual(states.get_state("b"), ModState.OUTDATED)
        self.assertEqual(states.get_state("a"), ModState.DOWNLOADABLE)

    async def test_local_id_collision_replaces_entry(self):
        states = ModStateRegistry()
        await states.set_state("a", "x", ModState.INSTALLED)
        await states.set_state("a", "y", ModState.UNKNOWN)

        self.assertEqual(len(states), 1)
        self.assertEqual(states.get_state("x"), ModState.DOWNLOADABLE)
        self.assertEqual(states.get_state("y"), ModState.UNKNOWN)

    async def test_set_removes_entries_matching_either_id(self):
        states = ModStateRegistry()
        await states.set_state("a", "x", ModState.INSTALLED)
        await states.set_state("b", "y", ModState.INSTALLED)
        await states.set_state("a", "y", ModState.OUTDATED)

        entries = states.entries()
        self.assertEqual(len(entries), 1)
        self.assertEqual((entries[0].local_id, entries[0].catalog_id), ("a", "y"))

    async def test_concurrent_sets_leave_one_entry_per_id(self):
        states = ModStateRegistry()
        await asyncio.gather(
            *(states.set_state(f"mod{i % 5}", f"cat{i % 5}", ModState.INSTALLED) for i in range(50))
        )
        self.assertEqual(len(states), 5)

    async def test_clear(self):
        states = ModStateRegistry()
        await states.set_state("a", "x", ModState.INSTALLED)
        await states.clear()
        self.assertEqual(len(states), 0)


if __name__ == "__main__":
    unittest.main()
