# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Reading and writing of training data (``.data``) and model (``.model``)
files.

Training data files are tab separated text.  The first line carries a
format tag, followed by ``Key: value`` header lines and a ``Data:``
line after which the rows follow.  Each row lists the target(s) first
and then the inputs, the same order as used by the ``add`` message::

  MLLIB_LABELLED_CLASSIFICATION_DATA_V1.0
  NumDimensions: 2
  TotalNumExamples: 2
  NumClasses: 2
  Data:
  1	0.1	0.2
  2	0.9	0.8

Time series files carry one ``TimeSeries:`` block per sequence, each with
``ClassID:`` and ``Length:`` lines followed by the rows of the sequence.

Model files are pickled dictionaries holding a format tag, the version of
mllib which wrote them, the class name of the learner and the learner
itself.
"""

__docformat__ = 'restructuredtext'

import pickle

import numpy as np

from mllib.datasets.base import ClassificationData, RegressionData, \
     TimeSeriesClassificationData, UnlabelledData

if __debug__:
    from mllib.base import debug


MODEL_FORMAT_TAG = 'MLLIB_MODEL_V1.0'

_FORMAT_TAGS = {
    ClassificationData: 'MLLIB_LABELLED_CLASSIFICATION_DATA_V1.0',
    RegressionData: 'MLLIB_LABELLED_REGRESSION_DATA_V1.0',
    TimeSeriesClassificationData:
        'MLLIB_LABELLED_TIME_SERIES_CLASSIFICATION_DATA_V1.0',
    UnlabelledData: 'MLLIB_UNLABELLED_CLASSIFICATION_DATA_V1.0',
    }

_TAG2CLASS = dict([(v, k) for k, v in _FORMAT_TAGS.items()])


class DataFormatError(IOError):
    """Thrown if a file does not follow the expected format"""
    pass


def _format_value(v):
    v = float(v)
    if np.isfinite(v) and v == int(v):
        return str(int(v))
    return repr(v)


def _format_row(values):
    return '\t'.join([_format_value(v) for v in values]) + '\n'


def _parse_row(line, lineno, ncolumns):
    try:
        row = [float(x) for x in line.split()]
    except ValueError:
        raise DataFormatError("line %d: non-numeric value in %r"
                              % (lineno, line))
    if len(row) != ncolumns:
        raise DataFormatError("line %d: expected %d values, got %d"
                              % (lineno, ncolumns, len(row)))
    return row


def _get_int(header, key):
    if not key in header:
        raise DataFormatError("header lacks '%s'" % key)
    try:
        return int(header[key])
    except ValueError:
        raise DataFormatError("'%s' must be an integer, got %r"
                              % (key, header[key]))


def _check_count(header, key, n):
    if key in header and _get_int(header, key) != n:
        raise DataFormatError("header announces %s %s, but %d were read"
                              % (header[key], key, n))


#
# Writers
#
def _write_classification(ds, out):
    out.write('NumDimensions: %d\n' % ds.nfeatures)
    out.write('TotalNumExamples: %d\n' % ds.nsamples)
    out.write('NumClasses: %d\n' % ds.nclasses)
    out.write('Data:\n')
    for label, vector in zip(ds.targets, ds.samples):
        out.write(_format_row([label] + list(vector)))


def _write_regression(ds, out):
    out.write('NumInputDimensions: %d\n' % ds.nfeatures)
    out.write('NumTargetDimensions: %d\n' % ds.ntargets)
    out.write('TotalNumExamples: %d\n' % ds.nsamples)
    out.write('Data:\n')
    for targets, inputs in zip(ds.targets, ds.samples):
        out.write(_format_row(list(targets) + list(inputs)))


def _write_timeseries(ds, out):
    out.write('NumDimensions: %d\n' % ds.nfeatures)
    out.write('TotalNumExamples: %d\n' % ds.nsamples)
    out.write('NumClasses: %d\n' % ds.nclasses)
    out.write('Data:\n')
    for label, sequence in ds.sequences:
        out.write('TimeSeries:\n')
        out.write('ClassID: %d\n' % label)
        out.write('Length: %d\n' % len(sequence))
        for row in sequence:
            out.write(_format_row(row))


def _write_unlabelled(ds, out):
    out.write('NumDimensions: %d\n' % ds.nfeatures)
    out.write('TotalNumExamples: %d\n' % ds.nsamples)
    out.write('Data:\n')
    for vector in ds.samples:
        out.write(_format_row(vector))


_WRITERS = {
    ClassificationData: _write_classification,
    RegressionData: _write_regression,
    TimeSeriesClassificationData: _write_timeseries,
    UnlabelledData: _write_unlabelled,
    }


def save_dataset(ds, filename):
    """Write a training data container into a text file

    Parameters
    ----------
    ds : ClassificationData or RegressionData or TimeSeriesClassificationData or UnlabelledData
      Container to store.
    filename : str
      Target file name.  An existing file is overwritten.
    """
    for cls in type(ds).__mro__:
        if cls in _WRITERS:
            break
    else:
        raise ValueError("Do not know how to store %s" % (ds,))

    if __debug__:
        debug('IOH', "Writing %s into %s", (ds, filename))

    with open(filename, 'w') as out:
        out.write(_FORMAT_TAGS[cls] + '\n')
        _WRITERS[cls](ds, out)


#
# Readers
#
def _read_classification(header, body):
    nfeatures = _get_int(header, 'NumDimensions')
    ds = ClassificationData(nfeatures)
    for lineno, line in body:
        row = _parse_row(line, lineno, nfeatures + 1)
        try:
            ds.add_sample(row[0], row[1:])
        except ValueError as e:
            raise DataFormatError("line %d: %s" % (lineno, e))
    _check_count(header, 'TotalNumExamples', ds.nsamples)
    return ds


def _read_regression(header, body):
    ninputs = _get_int(header, 'NumInputDimensions')
    ntargets = _get_int(header, 'NumTargetDimensions')
    ds = RegressionData(ninputs, ntargets)
    for lineno, line in body:
        row = _parse_row(line, lineno, ninputs + ntargets)
        ds.add_sample(row[ntargets:], row[:ntargets])
    _check_count(header, 'TotalNumExamples', ds.nsamples)
    return ds


def _read_timeseries(header, body):
    nfeatures = _get_int(header, 'NumDimensions')
    ds = TimeSeriesClassificationData(nfeatures)
    body = list(body)
    i = 0
    while i < len(body):
        lineno, line = body[i]
        if line != 'TimeSeries:':
            raise DataFormatError("line %d: expected 'TimeSeries:', got %r"
                                  % (lineno, line))
        block = dict()
        for key in ('ClassID', 'Length'):
            i += 1
            if i >= len(body):
                raise DataFormatError("unexpected end of file, expected '%s:'"
                                      % key)
            lineno, line = body[i]
            k, sep, v = line.partition(':')
            if not sep or k.strip() != key:
                raise DataFormatError("line %d: expected '%s:', got %r"
                                      % (lineno, key, line))
            block[key] = v.strip()
        length = _get_int(block, 'Length')
        rows = []
        for _ in range(length):
            i += 1
            if i >= len(body):
                raise DataFormatError("unexpected end of file within a "
                                      "sequence of length %d" % length)
            lineno, line = body[i]
            rows.append(_parse_row(line, lineno, nfeatures))
        try:
            ds.add_sample(float(block['ClassID']),
                          np.array(rows).reshape((length, nfeatures)))
        except ValueError as e:
            raise DataFormatError("sequence ending at line %d: %s"
                                  % (lineno, e))
        i += 1
    _check_count(header, 'TotalNumExamples', ds.nsamples)
    return ds


def _read_unlabelled(header, body):
    nfeatures = _get_int(header, 'NumDimensions')
    ds = UnlabelledData(nfeatures)
    for lineno, line in body:
        ds.add_sample(_parse_row(line, lineno, nfeatures))
    _check_count(header, 'TotalNumExamples', ds.nsamples)
    return ds


_READERS = {
    ClassificationData: _read_classification,
    RegressionData: _read_regression,
    TimeSeriesClassificationData: _read_timeseries,
    UnlabelledData: _read_unlabelled,
    }


def _split_file(filename):
    """Return format tag, header dictionary and numbered body lines"""
    tag = None
    header = {}
    body = None
    with open(filename, 'r') as file_:
        for lineno, line in enumerate(file_, 1):
            # get rid of leading and trailing whitespace
            line = line.strip()
            # ignore empty lines and comment lines
            if not line or line.startswith('#'):
                continue
            if tag is None:
                tag = line
            elif body is None:
                if line == 'Data:':
                    body = []
                    continue
                key, sep, value = line.partition(':')
                if not sep:
                    raise DataFormatError(
                          "line %d: expected 'Key: value' header, got %r"
                          % (lineno, line))
                header[key.strip()] = value.strip()
            else:
                body.append((lineno, line))
    if tag is None:
        raise DataFormatError("%s is empty" % filename)
    if body is None:
        raise DataFormatError("%s lacks a 'Data:' section" % filename)
    return tag, header, body


def load_dataset(filename, expected=None):
    """Read a training data container from a text file

    Parameters
    ----------
    filename : str
      File to read.
    expected : class or None
      If provided, the file must hold data of this container class.

    Returns
    -------
    ClassificationData or RegressionData or TimeSeriesClassificationData or UnlabelledData
    """
    tag, header, body = _split_file(filename)
    if not tag in _TAG2CLASS:
        raise DataFormatError("%s has unknown format tag %r"
                              % (filename, tag))
    cls = _TAG2CLASS[tag]
    if expected is not None and cls is not expected:
        raise DataFormatError("%s holds %s, expected %s"
                              % (filename, cls.__name__, expected.__name__))

    if __debug__:
        debug('IOH', "Reading %s from %s", (cls.__name__, filename))

    return _READERS[cls](header, body)


def save_model(learner, filename, name=None):
    """Store a trained learner into a model file

    Parameters
    ----------
    learner : Learner
    filename : str
    name : str or None
      Name of the object the model belongs to.
    """
    import mllib
    model = {'format': MODEL_FORMAT_TAG,
             'version': mllib.__version__,
             'learner': learner.__class__.__name__,
             'object': name,
             'model': learner}
    if __debug__:
        debug('IOH', "Writing model of %s into %s", (learner, filename))
    with open(filename, 'wb') as out:
        pickle.dump(model, out, protocol=pickle.HIGHEST_PROTOCOL)


def load_model(filename, expected=None):
    """Load a learner from a model file

    Parameters
    ----------
    filename : str
    expected : class or None
      If provided, the stored learner must be an instance of this class.

    Returns
    -------
    Learner
    """
    with open(filename, 'rb') as in_:
        try:
            model = pickle.load(in_)
        except (pickle.UnpicklingError, EOFError, AttributeError,
                ImportError, IndexError) as e:
            raise DataFormatError("%s is not a model file: %s"
                                  % (filename, e))
    if not isinstance(model, dict) \
       or model.get('format') != MODEL_FORMAT_TAG:
        raise DataFormatError("%s is not a model file" % filename)
    learner = model['model']
    if expected is not None \
       and (model['learner'] != expected.__name__
            or not isinstance(learner, expected)):
        raise DataFormatError("%s holds a model of %s, expected %s"
                              % (filename, model['learner'],
                                 expected.__name__))
    if __debug__:
        debug('IOH', "Read model of %s from %s", (learner, filename))
    return learner
