import io
import json
import os
import tempfile
import unittest

from lupivot.config import MatrixConfiguration, load_matrix_from_json
from lupivot.errors import InvalidDimension
from lupivot.store import DEFAULT_TOLERANCE


class TestMatrixConfiguration(unittest.TestCase):
    def setUp(self):
        self.config = MatrixConfiguration(
            values=[[2.0, 1.0], [1.0, 3.0]],
            tolerance=1e-6,
            label="Test Matrix",
            description="two by two",
        )

    def test_to_dict(self):
        data = self.config.to_dict()
        self.assertEqual(data["size"], 2)
        self.assertEqual(data["label"], "Test Matrix")
        self.assertEqual(data["values"], [[2.0, 1.0], [1.0, 3.0]])
        self.assertEqual(data["tolerance"], 1e-6)

    def test_from_json_file_object(self):
        payload = io.StringIO(self.config.to_json())
        loaded = MatrixConfiguration.from_json(payload)
        self.assertEqual(loaded, self.config)

    def test_save_and_load_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "matrix.json")
            self.config.save(path)
            store, config = load_matrix_from_json(path)
        self.assertEqual(config.label, "Test Matrix")
        self.assertTrue(store.is_populated)
        self.assertEqual(store.tolerance, 1e-6)
        self.assertEqual(store.row(1), [1.0, 3.0])

    def test_missing_tolerance_uses_sentinel(self):
        config = MatrixConfiguration.from_dict({"values": [[1, 0], [0, 1]]})
        self.assertEqual(config.tolerance, -1.0)
        self.assertEqual(config.resolved_tolerance, DEFAULT_TOLERANCE)
        self.assertEqual(config.build_store().tolerance, DEFAULT_TOLERANCE)

    def test_size_mismatch(self):
        with self.assertRaises(ValueError):
            MatrixConfiguration.from_dict({"size": 3, "values": [[1, 0], [0, 1]]})

    def test_non_object_json(self):
        with self.assertRaises(ValueError):
            MatrixConfiguration.from_json(io.StringIO(json.dumps([[1.0]])))

    def test_ragged_rows(self):
        config = MatrixConfiguration.from_dict({"values": [[1, 2], [3]]})
        with self.assertRaises(ValueError):
            config.build_store()

    def test_empty_matrix(self):
        config = MatrixConfiguration.from_dict({"values": []})
        with self.assertRaises(InvalidDimension):
            config.build_store()


if __name__ == '__main__':
    unittest.main()
