from __future__ import annotations

import importlib.util
import os
from pathlib import Path
import subprocess
import sys
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None
REPO_ROOT = Path(__file__).resolve().parent.parent


def _run_with_env(code: str, **env: str) -> str:
    merged = os.environ.copy()
    merged.update(env)
    src = str(REPO_ROOT / "src")
    merged["PYTHONPATH"] = os.pathsep.join(filter(None, [src, merged.get("PYTHONPATH", "")]))
    proc = subprocess.run(
        [sys.executable, "-c", code],
        env=merged,
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for arity introspection tests")
class ArityIntrospectionTests(unittest.TestCase):
    def test_applicable_bounds(self) -> None:
        from multiseq import applicable, max_arity

        self.assertFalse(applicable([]))
        self.assertTrue(applicable([1]))
        self.assertTrue(applicable([1, 2]))
        self.assertTrue(applicable([1, 2, 3]))
        self.assertTrue(applicable(list(range(1, max_arity() + 1))))
        self.assertFalse(applicable(list(range(1, max_arity() + 2))))

    def test_applicable_rejects_non_sequences(self) -> None:
        from multiseq import applicable

        for value in (None, 3, {"a": 1}, {1, 2}, iter([1, 2])):
            with self.subTest(value=value):
                self.assertFalse(applicable(value))

    def test_max_arity_defaults_to_twenty_five(self) -> None:
        from multiseq import max_arity

        if "MULTISEQ_MAX_ARITY" in os.environ:
            self.skipTest("MULTISEQ_MAX_ARITY overrides the default")
        self.assertEqual(max_arity(), 25)

    def test_max_arity_is_read_from_environment(self) -> None:
        code = (
            "import multiseq\n"
            "print(multiseq.max_arity(), multiseq.applicable([1, 2, 3]), multiseq.applicable([1, 2, 3, 4]))\n"
        )
        self.assertEqual(_run_with_env(code, MULTISEQ_MAX_ARITY="3"), "3 True False")


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for specializer tests")
class SpecializerTests(unittest.TestCase):
    def test_kernels_are_cached_per_arity(self) -> None:
        from multiseq import kernels_for, specializer_cache_stats

        specializer_cache_stats(reset=True)
        first = kernels_for(4)
        second = kernels_for(4)
        self.assertIs(first, second)
        self.assertEqual(first.arity, 4)

        stats = specializer_cache_stats()
        self.assertEqual(stats["misses"], 1)
        self.assertEqual(stats["hits"], 1)
        self.assertEqual(stats["size"], 1)
        self.assertAlmostEqual(stats["hit_rate"], 0.5)

        specializer_cache_stats(reset=True)
        self.assertEqual(specializer_cache_stats()["size"], 0)

    def test_kernels_outside_ceiling_are_not_applicable(self) -> None:
        from multiseq import NotApplicableError, kernels_for, max_arity

        for arity in (0, -1, max_arity() + 1):
            with self.subTest(arity=arity):
                with self.assertRaises(NotApplicableError):
                    kernels_for(arity)

    def test_fixed_and_generic_kernels_agree(self) -> None:
        from multiseq import Continue, Halt, kernels_for
        from multiseq import specialize

        if not specialize._USE_FIXED_ARITY_FAST_PATH:
            self.skipTest("fixed-arity fast path disabled")

        def fmr(*args):
            *items, acc = args
            if acc > 10:
                return Halt(acc)
            return Continue(list(items), acc + sum(items))

        for arity in (1, 2):
            seqs = [list(range(i, i + 6)) for i in range(arity)]
            fixed = kernels_for(arity)
            self.assertTrue(fixed.fixed)
            with self.subTest(arity=arity):
                self.assertEqual(
                    fixed.reduce(seqs, 0, lambda *a: sum(a)),
                    specialize._reduce(seqs, 0, lambda *a: sum(a)),
                )
                self.assertEqual(
                    fixed.map_reduce(seqs, 0, lambda *a: (a[:-1], a[-1] + 1)),
                    specialize._map_reduce(seqs, 0, lambda *a: (a[:-1], a[-1] + 1)),
                )
                self.assertEqual(
                    fixed.flat_map_reduce(seqs, 0, fmr),
                    specialize._flat_map_reduce(seqs, 0, fmr),
                )
                rows = specialize._zip(seqs)
                self.assertEqual(fixed.unzip(rows), specialize._make_unzip(arity)(rows))

    def test_fast_path_can_be_disabled(self) -> None:
        code = (
            "import multiseq\n"
            "k = multiseq.kernels_for(2)\n"
            "print(k.fixed, multiseq.reduce([[1, 2], [3, 4]], 0, lambda a, b, acc: a * b + acc))\n"
        )
        out = _run_with_env(code, MULTISEQ_DISABLE_FIXED_ARITY_FAST_PATH="1")
        self.assertEqual(out, "False 11")


if __name__ == "__main__":
    unittest.main()
