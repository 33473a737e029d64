# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for the message handling common to all objects"""

import os
import unittest

from mllib import cfg
from mllib.testing import *
from mllib.datasets.base import ClassificationData, UnlabelledData
from mllib.objects.base import *
from mllib.objects.messages import MessageRecorder, parse_message


class FailingObject(MLObject):
    def _msg_fail(self, atoms):
        raise ValueError("boom")


def test_file_extension():
    assert_equal(get_file_extension_from_path('/tmp/gesture.model'), '.model')
    assert_equal(get_file_extension_from_path('gesture.data'), '.data')
    assert_equal(get_file_extension_from_path('a/b.c/d'), '')
    assert_equal(get_file_extension_from_path('C:\\x.y\\z.data'), '.data')
    assert_equal(get_file_extension_from_path('noext'), '')
    assert_equal(get_file_extension_from_path('trailing.'), '')
    assert_equal(get_file_extension_from_path('/tmp/archive.tar.gz'), '.gz')


def test_data_file_paths():
    assert_equal(get_data_file_paths('/tmp/x'),
                 ('/tmp/x.data', '/tmp/x.model'))
    assert_equal(get_data_file_paths('/tmp/x.model'), ('', '/tmp/x.model'))
    assert_equal(get_data_file_paths('/tmp/x.data'), ('/tmp/x.data', ''))
    assert_equal(get_data_file_paths('/tmp/x.txt'),
                 ('/tmp/x.txt.data', '/tmp/x.txt.model'))
    # numeric looking symbols of a path keep their text
    assert_equal(MLObject._path(parse_message('write 1e3 2.50')[1]),
                 '1e3 2.50')


class MLObjectTests(unittest.TestCase):

    def setUp(self):
        self.obj = MLObject()
        self.rec = MessageRecorder()
        self.obj.connect(self.rec, outlet=-1)


    def test_defaults(self):
        obj = self.obj
        assert_equal(obj.name, 'ml')
        assert_equal(str(obj), 'ml(ml)')
        assert_equal(len(obj.outlets), 2)
        assert_true(obj.general_outlet is obj.outlets[1])
        assert_equal(obj.data_type, DataType.LABELLED_CLASSIFICATION)
        assert_true(isinstance(obj.dataset, ClassificationData))
        assert_equal(obj.params.num_inputs,
                     cfg.get_as_dtype('objects', 'num inputs', int))
        assert_equal(obj.learner, None)
        assert_false(obj.recording)
        assert_equal(obj.attribute_names(), ['scaling', 'probs', 'num_inputs'])

        obj = MLObject(name='gestures', num_inputs=3)
        assert_equal(obj.name, 'gestures')
        assert_equal(obj.dataset.nfeatures, 3)
        assert_in("name='gestures'", repr(obj))
        # unknown keyword arguments are rejected
        assert_raises(TypeError, MLObject, bogus=1)


    def test_add(self):
        obj = self.obj
        obj.send('num_inputs', 2)
        obj.send('add', 1, 0.5, 0.25)
        obj.send('add', 2, 1, 1)
        assert_equal(obj.dataset.nsamples, 2)
        assert_array_equal(obj.dataset.targets, [1, 2])

        with swallow_outputs() as cmo:
            obj.send('add', 1)
            obj.send('add', 1, 'abc', 2)
            obj.send('add', 0, 1, 2)
            obj.send('add', -1, 1, 2)
        assert_posted(cmo, "ml: error: invalid input length, must contain "
                           "at least 2 values")
        assert_posted(cmo, "invalid input, all values must be numbers")
        assert_posted(cmo, "class label must be non-zero")
        assert_posted(cmo, "class label must be a positive integer")
        assert_equal(obj.dataset.nsamples, 2)

        # a vector of another size changes the number of inputs
        with swallow_outputs() as cmo:
            obj.send('add', 1, 0.1, 0.2, 0.3)
        assert_posted(cmo, "new input vector size, adjusting num_inputs to 3",
                      name='ml')
        assert_equal(obj.params.num_inputs, 3)
        # stored vectors of the old size are gone
        assert_equal(obj.dataset.nsamples, 1)
        assert_equal(obj.dataset.nfeatures, 3)


    def test_unlabelled_add(self):
        obj = self.obj
        obj._set_data_type(DataType.UNLABELLED_CLASSIFICATION)
        assert_true(isinstance(obj.dataset, UnlabelledData))
        # all values are inputs
        obj.send('add', 0.5, 0.25)
        assert_equal(obj.dataset.nsamples, 1)
        assert_array_equal(obj.dataset.samples, [[0.5, 0.25]])
        assert_raises(ValueError, obj._set_data_type, 7)


    def test_recording(self):
        obj = self.obj
        with swallow_outputs() as cmo:
            obj.send('record', 1)
        assert_posted(cmo, "ml: error: record method only valid for time "
                           "series data")

        obj._set_data_type(DataType.LABELLED_TIME_SERIES_CLASSIFICATION)
        with swallow_outputs() as cmo:
            obj.send('add', 1, 0.1, 0.2)
        assert_posted(cmo, "cannot add time series data if recording is off, "
                           "send 'record 1' to start recording")
        assert_equal(obj.dataset.nsamples, 0)

        with swallow_outputs() as cmo:
            obj.send('record', 1)
            assert_true(obj.recording)
            for i in range(3):
                obj.send('add', 1, i, i)
            # a new class id closes the running sequence
            for i in range(2):
                obj.send('add', 2, i, -i)
            obj.send('record', 0)
            obj.send('record', 'maybe')
        assert_posted(cmo, "ml: recording: on")
        assert_posted(cmo, "ml: recording: off")
        assert_posted(cmo, "record expects 0 or 1")
        assert_false(obj.recording)
        assert_equal(obj.dataset.nsamples, 2)
        assert_array_equal(obj.dataset.targets, [1, 2])
        assert_array_equal(obj.dataset.lengths, [3, 2])

        # stopping again stores nothing
        with swallow_outputs():
            obj.send('record', 0)
        assert_equal(obj.dataset.nsamples, 2)


    def test_attributes(self):
        obj = self.obj
        obj.send('probs', 1)
        assert_true(obj.params.probs)
        obj.send('getprobs')
        assert_equal(self.rec.messages[-1], ('probs', [1]))
        obj.send('getscaling')
        assert_equal(self.rec.last('scaling'), [1])

        with swallow_outputs() as cmo:
            obj.send('scaling', 2)
            obj.send('num_inputs', 0)
            obj.send('bogus', 1)
            obj.send('getbogus')
        assert_posted(cmo, "ml: error: unable to set scaling, hint: should "
                           "be 0 or 1")
        assert_posted(cmo, "unable to set input or target dimensions")
        assert_posted(cmo, "messages with the selector 'bogus' are not "
                           "supported")
        assert_posted(cmo, "messages with the selector 'getbogus' are not "
                           "supported")
        assert_true(obj.params.scaling)

        obj.send('num_inputs', 4)
        assert_equal(obj.dataset.nfeatures, 4)
        assert_equal(obj.get_attribute('num_inputs'), [4])
        assert_raises(KeyError, obj.get_attribute, 'bogus')
        assert_raises(KeyError, obj.set_attribute, 'bogus', [1])
        assert_true(obj.set_attribute('probs', [0]))
        assert_false(obj.params.probs)


    def test_not_implemented(self):
        with swallow_outputs() as cmo:
            self.obj.send('train')
            self.obj.send('map', 1, 2)
        assert_equal(cmo.lines, ['ml: error: function not implemented'] * 2)


    def test_help(self):
        with swallow_outputs() as cmo:
            self.obj.send('help')
        assert_posted(cmo, 'Attributes:', name='ml')
        assert_posted(cmo, 'Methods:')
        assert_posted(cmo, 'scaling : bool, optional')
        assert_posted(cmo, "train:\ttrain the model")
        assert_in('Methods:', self.obj.usage())


    def test_clear(self):
        obj = self.obj
        obj.send('add', 1, 0.5, 0.25)
        obj.send('clear')
        assert_equal(self.rec.last('clear'), [1])
        assert_equal(obj.dataset.nsamples, 0)


    @with_tempfile()
    def test_write_read(self, tfile):
        obj = self.obj
        with swallow_outputs() as cmo:
            obj.send('write', tfile)
        assert_posted(cmo, "ml: error: no observations added, use 'add' to "
                           "add training data")
        assert_equal(self.rec.last('write'), [0])

        send_dataset(obj, separable_classification(perlabel=4, nfeatures=3))
        assert_equal(obj.dataset.nsamples, 8)

        # without an extension the training data lands in <path>.data
        obj.send('write', tfile)
        assert_equal(self.rec.last('write'), [1])
        assert_true(os.path.exists(tfile + '.data'))
        assert_false(os.path.exists(tfile + '.model'))

        obj.send('write', tfile + '.data')
        assert_equal(self.rec.last('write'), [1])

        obj2 = MLObject()
        rec2 = MessageRecorder()
        obj2.connect(rec2, outlet=1)
        obj2.send('read', tfile + '.data')
        assert_equal(rec2.last('read'), [1])
        assert_equal(obj2.params.num_inputs, 3)
        assert_array_equal(obj2.dataset.samples, obj.dataset.samples)
        assert_array_equal(obj2.dataset.targets, obj.dataset.targets)

        with swallow_outputs() as cmo:
            obj2.send('read', tfile + '_missing.data')
            obj2.send('read', tfile + '.model')
            obj2.send('read')
            obj2.send('write')
        assert_posted(cmo, "unable to read training data from path: %s"
                           % (tfile + '_missing.data'))
        assert_posted(cmo, "unable to read model from path: %s"
                           % (tfile + '.model'))
        assert_posted(cmo, "ml: error: path string is empty")
        assert_equal(rec2.messages[-2:], [('read', [0]), ('read', [0])])

        missing = os.path.join(tfile + '_missing', 'data.data')
        with swallow_outputs() as cmo:
            obj.send('write', missing)
        assert_posted(cmo, "ml: error: unable to write training data to path: "
                           "%s" % missing)
        assert_equal(self.rec.last('write'), [0])
        assert_false(os.path.exists(missing))
        # previously read data survives failing reads
        assert_equal(obj2.dataset.nsamples, 8)


    @with_tempfile(suffix='.data')
    def test_read_wrong_data_type(self, tfile):
        ds = UnlabelledData(2)
        ds.add_sample([1, 2])
        from mllib.datasets.formats import save_dataset
        save_dataset(ds, tfile)
        with swallow_outputs() as cmo:
            self.obj.send('read', tfile)
        assert_posted(cmo, "unable to read training data from path")
        assert_equal(self.rec.last('read'), [0])


    def test_connect_all_outlets(self):
        received = []
        self.obj.connect(lambda o, s, a: received.append((o.index, s, a)))
        self.obj.send('getprobs')
        self.obj.send('clear')
        assert_equal(received, [(1, 'probs', [0]), (1, 'clear', [1])])


    def test_strict(self):
        obj = FailingObject()
        assert_false(obj.strict)
        with swallow_outputs() as cmo:
            obj.send('fail')
        assert_equal(cmo.lines, ['ml: error: boom'])

        obj = FailingObject(strict=True)
        assert_raises(ValueError, obj.send, 'fail')
