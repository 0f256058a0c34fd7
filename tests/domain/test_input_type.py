import unittest

from src.layerconf.domain._errors import ConfigurationError
from src.layerconf.domain._input_type import InputType, InputTypeKind


class TestInputType(unittest.TestCase):
    def test_convolutional(self):
        t = InputType.convolutional(height=28, width=32, channels=3)
        self.assertIs(t.kind, InputTypeKind.CNN)
        self.assertEqual(t.shape(), (3, 28, 32))
        self.assertEqual(str(t), "InputTypeConvolutional(h=28,w=32,c=3)")

    def test_other_kinds(self):
        self.assertEqual(InputType.feed_forward(10).shape(), (10,))
        self.assertEqual(InputType.recurrent(10, 7).shape(), (10, 7))
        self.assertEqual(InputType.recurrent(10).time_series_length, 0)
        flat = InputType.convolutional_flat(4, 5, 2)
        self.assertIs(flat.kind, InputTypeKind.CNN_FLAT)
        self.assertEqual(flat.shape(), (40,))

    def test_invalid_dimensions_raise(self):
        with self.assertRaises(ConfigurationError):
            InputType.convolutional(0, 10, 3)
        with self.assertRaises(ConfigurationError):
            InputType.convolutional(10, 10, -1)
        with self.assertRaises(ConfigurationError):
            InputType.convolutional(10.5, 10, 3)
        with self.assertRaises(ConfigurationError):
            InputType.feed_forward(True)
        with self.assertRaises(ConfigurationError):
            InputType.recurrent(4, -2)

    def test_value_semantics(self):
        a = InputType.convolutional(8, 8, 1)
        b = InputType.convolutional(8, 8, 1)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, InputType.convolutional_flat(8, 8, 1))


if __name__ == "__main__":
    unittest.main()
