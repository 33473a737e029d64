# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for training data containers and their file formats"""

import pickle
import unittest

import numpy as np

from mllib.testing import *
from mllib.datasets.base import *
from mllib.datasets.formats import *


class DataContainerTests(unittest.TestCase):

    def test_class_labels(self):
        assert_equal(check_class_label(3), 3)
        assert_equal(check_class_label(3.0), 3)
        assert_equal(check_class_label('2'), 2)
        for label in (-1, 1.5, 'a'):
            assert_raises(ValueError, check_class_label, label)
        try:
            check_class_label(0)
        except ValueError as e:
            assert_equal(str(e), "class label must be non-zero")
        else:
            raise AssertionError("0 must not be accepted as a label")

    def test_num_dimensions(self):
        assert_equal(check_num_dimensions(3), 3)
        assert_equal(check_num_dimensions(3.0), 3)
        for n in (0, -2, 1.5, True, 'x'):
            assert_raises(ValueError, check_num_dimensions, n)

    def test_classification(self):
        ds = ClassificationData(2)
        assert_true(ds.empty)
        ds.add_sample(1, [0.1, 0.2])
        ds.add_sample(2, (0.9, 0.8))
        ds.add_sample(2, np.array([1.0, 0.7]))
        assert_equal(len(ds), 3)
        assert_equal(ds.samples.shape, (3, 2))
        assert_array_equal(ds.targets, [1, 2, 2])
        assert_array_equal(ds.unique_targets, [1, 2])
        assert_equal(ds.nclasses, 2)
        assert_equal(ds.class_counts(), {1: 1, 2: 2})
        # wrong dimensionality
        assert_raises(ValueError, ds.add_sample, 1, [0.1])
        assert_raises(ValueError, ds.add_sample, 0, [0.1, 0.2])
        assert_equal(len(ds), 3)
        # changing dimensions drops the samples
        ds.set_num_dimensions(3)
        assert_true(ds.empty)
        assert_equal(ds.samples.shape, (0, 3))
        ds.add_sample(1, [1, 2, 3])
        ds.clear()
        assert_equal(ds.nfeatures, 3)
        assert_equal(ds.nsamples, 0)

    def test_regression(self):
        ds = RegressionData(2, 1)
        ds.add_sample([0.1, 0.2], [1.5])
        ds.add_sample([0.3, 0.4], 2.5)
        assert_equal(ds.samples.shape, (2, 2))
        assert_equal(ds.targets.shape, (2, 1))
        assert_array_equal(ds.targets[:, 0], [1.5, 2.5])
        assert_raises(ValueError, ds.add_sample, [0.1, 0.2], [1, 2])
        ds.set_input_and_target_dimensions(1, 2)
        assert_true(ds.empty)
        assert_equal((ds.nfeatures, ds.ntargets), (1, 2))
        ds.set_num_dimensions(3)
        assert_equal((ds.nfeatures, ds.ntargets), (3, 2))
        assert_raises(ValueError, ds.set_input_and_target_dimensions, 1, 0)

    def test_timeseries(self):
        ds = TimeSeriesClassificationData(1)
        ds.add_sample(1, [0, 1, 2])
        ds.add_sample(2, [[3], [2]])
        assert_equal(ds.nsamples, 2)
        assert_array_equal(ds.lengths, [3, 2])
        assert_array_equal(ds.targets, [1, 2])
        assert_equal(ds.samples[0].shape, (3, 1))
        assert_raises(ValueError, ds.add_sample, 1, [])
        assert_raises(ValueError, ds.add_sample, 1, [[1, 2]])

    def test_unlabelled(self):
        ds = UnlabelledData(3)
        ds.add_sample([1, 2, 3])
        assert_array_equal(ds.samples, [[1, 2, 3]])
        assert_raises(ValueError, ds.add_sample, [1, 2])

    def test_timeseries_buffer(self):
        ts = TimeSeries(2)
        assert_equal(len(ts), 0)
        # first row defines the dimensionality
        ts.append([1, 2, 3])
        assert_equal(ts.nfeatures, 3)
        ts.append([4, 5, 6])
        assert_raises(ValueError, ts.append, [1])
        assert_array_equal(ts.as_array(), [[1, 2, 3], [4, 5, 6]])
        ts.clear()
        assert_equal(ts.nrows, 0)


class DataFormatTests(unittest.TestCase):

    @with_tempfile(suffix='.data')
    def test_classification_io(self, tfile):
        ds = separable_classification(perlabel=3, nlabels=3)
        save_dataset(ds, tfile)
        with open(tfile) as f:
            lines = f.read().splitlines()
        assert_equal(lines[0], 'MLLIB_LABELLED_CLASSIFICATION_DATA_V1.0')
        assert_in('NumClasses: 3', lines)
        assert_equal(lines[5].split('\t')[0], '1')

        ds_ = load_dataset(tfile)
        assert_true(isinstance(ds_, ClassificationData))
        assert_array_equal(ds_.targets, ds.targets)
        assert_array_almost_equal(ds_.samples, ds.samples)
        load_dataset(tfile, expected=ClassificationData)
        assert_raises(DataFormatError, load_dataset, tfile,
                      expected=RegressionData)

    @with_tempfile(suffix='.data')
    def test_regression_io(self, tfile):
        ds = RegressionData(2, 2)
        ds.add_sample([0.25, 1], [3, -1.5])
        ds.add_sample([0.5, 2], [4, 1e-3])
        save_dataset(ds, tfile)
        ds_ = load_dataset(tfile, expected=RegressionData)
        assert_equal((ds_.nfeatures, ds_.ntargets), (2, 2))
        assert_array_equal(ds_.samples, ds.samples)
        assert_array_equal(ds_.targets, ds.targets)

    @with_tempfile(suffix='.data')
    def test_timeseries_io(self, tfile):
        ds = symbol_sequences(nsequences=2, length=5)
        save_dataset(ds, tfile)
        with open(tfile) as f:
            content = f.read()
        assert_equal(content.count('TimeSeries:'), 4)
        ds_ = load_dataset(tfile)
        assert_true(isinstance(ds_, TimeSeriesClassificationData))
        assert_array_equal(ds_.targets, ds.targets)
        assert_array_equal(ds_.lengths, [5] * 4)
        for s, s_ in zip(ds.samples, ds_.samples):
            assert_array_equal(s, s_)

    @with_tempfile(suffix='.data')
    def test_unlabelled_io(self, tfile):
        ds = blob_unlabelled(nsamples=4, nfeatures=3)
        save_dataset(ds, tfile)
        ds_ = load_dataset(tfile, expected=UnlabelledData)
        assert_array_almost_equal(ds_.samples, ds.samples)

    @with_tempfile(suffix='.data')
    def test_hand_written(self, tfile):
        with open(tfile, 'w') as f:
            f.write("# written by hand\n"
                    "MLLIB_LABELLED_CLASSIFICATION_DATA_V1.0\n"
                    "NumDimensions: 2\n"
                    "\n"
                    "Data:\n"
                    "1 0.5 0.5\n"
                    "3\t1\t1\n")
        ds = load_dataset(tfile)
        assert_array_equal(ds.targets, [1, 3])
        assert_array_equal(ds.samples, [[0.5, 0.5], [1, 1]])

    @with_tempfile(suffix='.data')
    def test_malformed(self, tfile):
        def check(content):
            with open(tfile, 'w') as f:
                f.write(content)
            assert_raises(DataFormatError, load_dataset, tfile)

        tag = "MLLIB_LABELLED_CLASSIFICATION_DATA_V1.0\n"
        check("")
        check("SOME_OTHER_FORMAT\nNumDimensions: 1\nData:\n")
        check(tag + "NumDimensions: 1\n")
        check(tag + "Data:\n1 2\n")
        check(tag + "NumDimensions: two\nData:\n")
        check(tag + "Bogus header\nData:\n")
        check(tag + "NumDimensions: 1\nData:\n1 2 3\n")
        check(tag + "NumDimensions: 1\nData:\n1 x\n")
        check(tag + "NumDimensions: 1\nData:\n0 2\n")
        check(tag + "NumDimensions: 1\nTotalNumExamples: 2\nData:\n1 2\n")
        check("MLLIB_LABELLED_TIME_SERIES_CLASSIFICATION_DATA_V1.0\n"
              "NumDimensions: 1\nData:\nTimeSeries:\nClassID: 1\n"
              "Length: 3\n1\n2\n")

    @with_tempfile(suffix='.model')
    def test_not_a_model(self, tfile):
        with open(tfile, 'wb') as f:
            f.write(b'\xff\xfe')
        assert_raises(DataFormatError, load_model, tfile)
        with open(tfile, 'wb') as f:
            pickle.dump({'format': 'bogus'}, f)
        assert_raises(DataFormatError, load_model, tfile)
