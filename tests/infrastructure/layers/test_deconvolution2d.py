import copy
import dataclasses
import unittest

import numpy as np

from src.layerconf.domain._enums import (
    Activation,
    AlgoMode,
    BwdDataAlgo,
    ConvolutionMode,
    FwdAlgo,
)
from src.layerconf.domain._errors import ConfigurationError, InvalidInputError
from src.layerconf.domain._input_type import InputType, InputTypeKind
from src.layerconf.infrastructure.layers._deconvolution2d import (
    Deconvolution2D,
    deconvolution2d,
)


class TestDeconvolution2DConstruction(unittest.TestCase):
    def test_defaults(self):
        conf = deconvolution2d()
        self.assertEqual(conf.kernel_size, (5, 5))
        self.assertEqual(conf.stride, (1, 1))
        self.assertEqual(conf.padding, (0, 0))
        self.assertEqual(conf.dilation, (1, 1))
        self.assertIs(conf.convolution_mode, ConvolutionMode.TRUNCATE)
        self.assertTrue(conf.has_bias)
        self.assertEqual((conf.n_in, conf.n_out), (0, 0))
        self.assertIs(conf.activation, Activation.IDENTITY)
        self.assertIs(conf.cudnn_algo_mode, AlgoMode.PREFER_FASTEST)

    def test_valid_length_two_hyperparameters(self):
        cases = [
            ((3, 3), (1, 1), (0, 0), (1, 1)),
            ([2, 4], [2, 1], [1, 0], [1, 2]),
            ((1, 7), (3, 3), (2, 2), (2, 2)),
        ]
        for k, s, p, d in cases:
            with self.subTest(k=k, s=s, p=p, d=d):
                conf = deconvolution2d(k, s, p, dilation=d, n_in=1, n_out=1)
                self.assertEqual(conf.kernel_size, tuple(k))
                self.assertEqual(conf.stride, tuple(s))
                self.assertEqual(conf.padding, tuple(p))
                self.assertEqual(conf.dilation, tuple(d))

    def test_int_shorthand(self):
        conf = deconvolution2d(kernel_size=3, stride=2, padding=1, dilation=2)
        self.assertEqual(conf.kernel_size, (3, 3))
        self.assertEqual(conf.stride, (2, 2))
        self.assertEqual(conf.padding, (1, 1))
        self.assertEqual(conf.dilation, (2, 2))

    def test_wrong_length_fails_at_construction(self):
        for field in ("kernel_size", "stride", "padding", "dilation"):
            for bad in ([3], [1, 1, 1]):
                with self.subTest(field=field, bad=bad):
                    with self.assertRaises(ConfigurationError) as ctx:
                        deconvolution2d(**{field: bad})
                    self.assertIn(field, str(ctx.exception))

    def test_out_of_range_values_fail(self):
        with self.assertRaises(ConfigurationError):
            deconvolution2d(kernel_size=(0, 3))
        with self.assertRaises(ConfigurationError):
            deconvolution2d(stride=(1, 0))
        with self.assertRaises(ConfigurationError):
            deconvolution2d(padding=(-1, 0))
        with self.assertRaises(ConfigurationError):
            deconvolution2d(dilation=(0, 1))
        with self.assertRaises(ConfigurationError):
            deconvolution2d(n_in=-1)
        with self.assertRaises(ConfigurationError):
            deconvolution2d(n_out=2.5)

    def test_has_bias_must_be_bool(self):
        for bad in ("false", 0, None):
            with self.subTest(bad=bad):
                with self.assertRaises(ConfigurationError) as ctx:
                    deconvolution2d(n_in=1, n_out=1, has_bias=bad)
                self.assertIn("has_bias", str(ctx.exception))
        self.assertFalse(deconvolution2d(has_bias=np.bool_(False)).has_bias)

    def test_bias_init_must_be_real(self):
        for bad in ("abc", "0.5", None, True):
            with self.subTest(bad=bad):
                with self.assertRaises(ConfigurationError) as ctx:
                    deconvolution2d(bias_init=bad)
                self.assertIn("bias_init", str(ctx.exception))
        self.assertEqual(deconvolution2d(bias_init=1).bias_init, 1.0)
        self.assertEqual(deconvolution2d(bias_init=np.float32(0.5)).bias_init, 0.5)

    def test_enum_names_are_parsed(self):
        conf = deconvolution2d(
            convolution_mode="same",
            activation="ReLU",
            cudnn_algo_mode="no_workspace",
        )
        self.assertIs(conf.convolution_mode, ConvolutionMode.SAME)
        self.assertIs(conf.activation, Activation.RELU)
        self.assertIs(conf.cudnn_algo_mode, AlgoMode.NO_WORKSPACE)

    def test_unknown_enum_name_fails(self):
        with self.assertRaises(ConfigurationError) as ctx:
            deconvolution2d(convolution_mode="valid")
        self.assertIn("ConvolutionMode", str(ctx.exception))

    def test_unknown_weight_init_fails(self):
        with self.assertRaises(ConfigurationError) as ctx:
            deconvolution2d(weight_init="does_not_exist", name="up")
        self.assertIn("weight_init", str(ctx.exception))
        self.assertEqual(ctx.exception.layer_name, "up")

    def test_explicit_algorithms_require_user_specified(self):
        with self.assertRaises(ConfigurationError):
            deconvolution2d(cudnn_fwd_algo="fft")

        conf = deconvolution2d(
            cudnn_algo_mode=AlgoMode.USER_SPECIFIED,
            cudnn_fwd_algo="fft",
            cudnn_bwd_data_algo=BwdDataAlgo.WINOGRAD,
        )
        self.assertIs(conf.cudnn_fwd_algo, FwdAlgo.FFT)
        self.assertIs(conf.cudnn_bwd_data_algo, BwdDataAlgo.WINOGRAD)
        self.assertIsNone(conf.cudnn_bwd_filter_algo)


class TestDeconvolution2DValueSemantics(unittest.TestCase):
    def test_is_immutable(self):
        conf = deconvolution2d(kernel_size=3, n_in=3, n_out=8)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            conf.n_out = 4

    def test_copy_is_equal_value(self):
        conf = deconvolution2d(kernel_size=(3, 2), n_in=3, n_out=8, name="up")
        clone = copy.copy(conf)
        self.assertEqual(clone, conf)
        self.assertEqual(hash(clone), hash(conf))
        self.assertEqual(copy.deepcopy(conf), conf)

    def test_replace_revalidates(self):
        conf = deconvolution2d(kernel_size=3)
        changed = dataclasses.replace(conf, stride=[2, 2])
        self.assertEqual(changed.stride, (2, 2))
        self.assertEqual(conf.stride, (1, 1))
        with self.assertRaises(ConfigurationError):
            dataclasses.replace(conf, stride=(1, 2, 3))


class TestDeconvolution2DOutputType(unittest.TestCase):
    def test_truncate_output_shape(self):
        conf = deconvolution2d(
            kernel_size=(3, 3),
            stride=(1, 1),
            padding=(0, 0),
            dilation=(1, 1),
            convolution_mode=ConvolutionMode.TRUNCATE,
            n_in=3,
            n_out=8,
        )
        out = conf.get_output_type(0, InputType.convolutional(10, 10, 3))
        self.assertIs(out.kind, InputTypeKind.CNN)
        self.assertEqual(out.shape(), (8, 12, 12))

    def test_same_output_shape(self):
        conf = deconvolution2d(
            kernel_size=3,
            stride=2,
            convolution_mode=ConvolutionMode.SAME,
            n_in=3,
            n_out=4,
        )
        out = conf.get_output_type(0, InputType.convolutional(10, 6, 3))
        self.assertEqual((out.height, out.width), (20, 12))

    def test_strict_invalid_output_raises(self):
        conf = deconvolution2d(
            kernel_size=3,
            padding=3,
            convolution_mode="strict",
            n_in=1,
            n_out=1,
            name="bad",
        )
        with self.assertRaises(ConfigurationError) as ctx:
            conf.get_output_type(2, InputType.convolutional(2, 2, 1))
        self.assertIn('layer name="bad"', str(ctx.exception))
        self.assertIn("layer index=2", str(ctx.exception))

    def test_non_cnn_input_raises(self):
        conf = deconvolution2d(kernel_size=3, n_in=3, n_out=8, name="deconv")
        with self.assertRaises(InvalidInputError) as ctx:
            conf.get_output_type(0, InputType.feed_forward(300))
        self.assertIn("Deconvolution2D", str(ctx.exception))
        self.assertIn('layer name="deconv"', str(ctx.exception))

    def test_unset_n_out_raises(self):
        conf = deconvolution2d(kernel_size=3, n_in=3)
        with self.assertRaises(ConfigurationError):
            conf.get_output_type(0, InputType.convolutional(10, 10, 3))

    def test_output_type_is_idempotent(self):
        conf = deconvolution2d(kernel_size=(4, 3), stride=(2, 1), n_in=3, n_out=5)
        x = InputType.convolutional(7, 9, 3)
        self.assertEqual(conf.get_output_type(0, x), conf.get_output_type(0, x))


class TestDeconvolution2DParamTable(unittest.TestCase):
    def test_with_bias(self):
        conf = deconvolution2d(kernel_size=(5, 5), n_in=3, n_out=16, has_bias=True)
        self.assertEqual(conf.param_table(), {"W": (16, 3, 5, 5), "b": (16,)})
        self.assertEqual(conf.num_params(), 16 * 3 * 5 * 5 + 16)

    def test_without_bias(self):
        conf = deconvolution2d(kernel_size=(5, 5), n_in=3, n_out=16, has_bias=False)
        table = conf.param_table()
        self.assertEqual(table, {"W": (16, 3, 5, 5)})
        self.assertNotIn("b", table)

    def test_unset_channels_raise(self):
        with self.assertRaises(ConfigurationError):
            deconvolution2d(kernel_size=5, n_out=16).param_table()
        with self.assertRaises(ConfigurationError):
            deconvolution2d(kernel_size=5, n_in=3).param_table()


class TestDeconvolution2DWithNIn(unittest.TestCase):
    def test_fills_unset_n_in(self):
        conf = deconvolution2d(kernel_size=3, n_out=8)
        filled = conf.with_n_in_from(InputType.convolutional(10, 10, 3))
        self.assertEqual(filled.n_in, 3)
        self.assertEqual(conf.n_in, 0)

    def test_keeps_matching_n_in(self):
        conf = deconvolution2d(kernel_size=3, n_in=3, n_out=8)
        self.assertIs(conf.with_n_in_from(InputType.convolutional(10, 10, 3)), conf)

    def test_mismatched_n_in_raises_unless_override(self):
        conf = deconvolution2d(kernel_size=3, n_in=5, n_out=8, name="up")
        x = InputType.convolutional(10, 10, 3)
        with self.assertRaises(ConfigurationError) as ctx:
            conf.with_n_in_from(x, layer_index=1)
        self.assertIn("nIn=5", str(ctx.exception))
        self.assertEqual(ctx.exception.layer_index, 1)
        self.assertEqual(conf.with_n_in_from(x, override=True).n_in, 3)

    def test_rejects_non_cnn(self):
        conf = deconvolution2d(kernel_size=3, n_out=8)
        with self.assertRaises(InvalidInputError):
            conf.with_n_in_from(InputType.feed_forward(10))


class TestDeconvolution2DInstantiate(unittest.TestCase):
    def test_allocates_and_lays_out_params(self):
        conf = deconvolution2d(
            kernel_size=(3, 2), n_in=2, n_out=4, weight_init="ones", bias_init=0.25
        )
        out = conf.instantiate()
        self.assertIs(out.conf, conf)
        self.assertEqual(out.flat.shape, (conf.num_params(),))
        self.assertEqual(out.flat.dtype, np.float32)
        self.assertEqual(out.params["W"].shape, (4, 2, 3, 2))
        self.assertEqual(out.params["b"].shape, (4,))
        self.assertTrue(np.all(out.params["W"] == 1.0))
        self.assertTrue(np.all(out.params["b"] == 0.25))
        self.assertTrue(np.shares_memory(out.params["W"], out.flat))

    def test_uses_given_buffer(self):
        conf = deconvolution2d(kernel_size=2, n_in=1, n_out=1, has_bias=False)
        buf = np.arange(4, dtype=np.float64)
        out = conf.instantiate(buf, initialize_params=False)
        self.assertIs(out.flat, buf)
        np.testing.assert_array_equal(out.params["W"].ravel(), [0.0, 1.0, 2.0, 3.0])

    def test_unset_channels_raise_with_layer_index(self):
        conf = deconvolution2d(kernel_size=3, n_out=8, name="up")
        with self.assertRaises(ConfigurationError) as ctx:
            conf.instantiate(layer_index=2)
        self.assertIn("layer index=2", str(ctx.exception))
        self.assertIn("nIn", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
