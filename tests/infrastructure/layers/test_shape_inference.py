import unittest

from src.layerconf.domain._errors import ConfigurationError, InvalidInputError
from src.layerconf.domain._input_type import InputType
from src.layerconf.infrastructure.layers._deconvolution2d import deconvolution2d
from src.layerconf.infrastructure.layers._shape_inference import infer_output_types


class TestInferOutputTypes(unittest.TestCase):
    def test_chains_layers_and_fills_n_in(self):
        layers = [
            deconvolution2d(kernel_size=2, stride=2, n_out=8),
            deconvolution2d(kernel_size=2, stride=2, n_out=4),
        ]
        resolved, outputs = infer_output_types(
            layers, InputType.convolutional(4, 4, 3)
        )

        self.assertEqual([layer.n_in for layer in resolved], [3, 8])
        self.assertEqual([out.shape() for out in outputs], [(8, 8, 8), (4, 16, 16)])
        # Inputs are values; the originals are untouched.
        self.assertEqual(layers[0].n_in, 0)
        self.assertEqual(resolved[1].param_table()["W"], (4, 8, 2, 2))

    def test_empty_stack(self):
        resolved, outputs = infer_output_types([], InputType.convolutional(4, 4, 3))
        self.assertEqual((resolved, outputs), ([], []))

    def test_non_cnn_input_propagates(self):
        with self.assertRaises(InvalidInputError):
            infer_output_types(
                [deconvolution2d(kernel_size=2, n_out=8)], InputType.feed_forward(16)
            )

    def test_mismatched_n_in_reports_layer_index(self):
        layers = [
            deconvolution2d(kernel_size=2, n_out=8),
            deconvolution2d(kernel_size=2, n_in=5, n_out=4),
        ]
        with self.assertRaises(ConfigurationError) as ctx:
            infer_output_types(layers, InputType.convolutional(4, 4, 3))
        self.assertEqual(ctx.exception.layer_index, 1)
        self.assertIn("nIn=5", str(ctx.exception))

    def test_matching_explicit_n_in_is_kept(self):
        layer = deconvolution2d(kernel_size=2, n_in=3, n_out=8)
        resolved, _ = infer_output_types([layer], InputType.convolutional(4, 4, 3))
        self.assertIs(resolved[0], layer)

    def test_failure_reports_layer_index(self):
        layers = [
            deconvolution2d(kernel_size=2, n_out=8),
            deconvolution2d(kernel_size=1, padding=5, n_out=8, convolution_mode="strict"),
        ]
        with self.assertRaises(ConfigurationError) as ctx:
            infer_output_types(layers, InputType.convolutional(3, 3, 1))
        self.assertEqual(ctx.exception.layer_index, 1)


if __name__ == "__main__":
    unittest.main()
