# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Base class of all objects a patching environment talks to.

An object receives messages through `MLObject.send`: a selector followed
by atoms.  Known selectors are handled by ``_msg_<selector>`` methods,
any other selector either sets an attribute (``<attribute> <value...>``),
queries one (``get<attribute>``) or is reported as not supported.  Results
leave the object through its `outlets`; the last outlet is the general
purpose outlet carrying tagged status messages.  Informative messages and
errors are written to the host console (`mllib.base.console`).

Every object owns one training data container per data type and a
buffer time series get recorded into.  The active data type decides
which container ``add``, ``write``, ``read`` and ``train`` work with.
"""

__docformat__ = 'restructuredtext'

from mllib.base import cfg, console
from mllib.base.state import ClassWithCollections
from mllib.base.param import Parameter
from mllib.base.constraints import EnsureBool, EnsureInt, EnsureRange, \
     Constraints
from mllib.base.learner import LearnerError
from mllib.base.dochelpers import _repr_attrs
from mllib.datasets.base import ClassificationData, RegressionData, \
     TimeSeriesClassificationData, UnlabelledData, TimeSeries, \
     check_class_label
from mllib.datasets.formats import save_dataset, load_dataset
from mllib.objects.messages import Outlet, format_atom, format_message

if __debug__:
    from mllib.base import debug

__all__ = ['DataType', 'MLObject', 'get_file_extension_from_path',
           'get_data_file_paths', 'MODEL_EXTENSION', 'DATA_EXTENSION']


MODEL_EXTENSION = '.model'
DATA_EXTENSION = '.data'

_POST_SEPARATOR = '-' * 40


def get_file_extension_from_path(path):
    """Extension (including the dot) of the file name in `path`

    Directories are stripped first, so only the last path component
    counts.  A name ending with a bare dot has no extension.

    Examples
    --------
    >>> get_file_extension_from_path('/tmp/gesture.model')
    '.model'
    >>> get_file_extension_from_path('a/b.c/d')
    ''
    """
    sep = max(path.rfind('/'), path.rfind('\\'))
    if sep >= 0:
        path = path[sep + 1:]
    dot = path.rfind('.')
    if dot < 0:
        return ''
    extension = path[dot:]
    if extension == '.':
        return ''
    return extension


def get_data_file_paths(path):
    """Derive the paths of the training data and the model files

    Returns
    -------
    tuple
      ``(data_path, model_path)``, an empty string standing for "do not
      touch".  A ``.model`` path only refers to a model, a ``.data`` path
      only to training data, any other path refers to both after
      appending the respective extension.
    """
    extension = get_file_extension_from_path(path)
    if extension == MODEL_EXTENSION:
        return '', path
    elif extension == DATA_EXTENSION:
        return path, ''
    return path + DATA_EXTENSION, path + MODEL_EXTENSION



class DataType(object):
    """Kinds of training data an object works with"""

    LABELLED_CLASSIFICATION = 0
    LABELLED_REGRESSION = 1
    LABELLED_TIME_SERIES_CLASSIFICATION = 2
    UNLABELLED_CLASSIFICATION = 3

    names = ('LABELLED_CLASSIFICATION', 'LABELLED_REGRESSION',
             'LABELLED_TIME_SERIES_CLASSIFICATION',
             'UNLABELLED_CLASSIFICATION')

    containers = (ClassificationData, RegressionData,
                  TimeSeriesClassificationData, UnlabelledData)



class MLObject(ClassWithCollections):
    """Base object: training data management, persistence and messaging

    Derived objects provide a learner (`_learner_class`) and implement
    ``train`` and ``map``.  Attributes of the learner (its parameters) are
    exposed as attributes of the object, next to the object's own ones.
    """

    __tags__ = []
    """Tags the object warehouse selects objects by"""

    _host_name = 'ml'
    """Name the object is known under in a patch"""

    _learner_class = None

    _hidden_learner_params = ('scaling',)
    """Learner parameters controlled through attributes of the object"""

    _default_data_type = DataType.LABELLED_CLASSIFICATION

    _default_num_inputs = None
    """Default number of inputs, None to take it from the configuration"""

    _outlets_doc = ('results', 'general purpose outlet')

    _methods_help = (
        ('add', "list comprising a class id followed by n features; "
                "<class> <feature 1> <feature 2> etc"),
        ('record', "start (1) or stop (0) recording a time series"),
        ('write', "write training examples, first argument gives path to "
                  "write file"),
        ('read', "read training examples, first argument gives path to the "
                 "read location"),
        ('train', "train the model based on vectors added with 'add'"),
        ('clear', "clear the stored training data and model"),
        ('map', "give the output value for the input feature vector"),
        ('help', "post this usage statement to the console"),
        )

    _message_aliases = {}

    scaling = Parameter(True, constraints=EnsureBool(),
        doc="""Whether values are automatically scaled into [0, 1]""",
        errmsg="unable to set scaling, hint: should be 0 or 1",
        index=1001)

    probs = Parameter(False, constraints=EnsureBool(),
        doc="""Whether probabilities are sent from the general purpose
        outlet after mapping""",
        errmsg="unable to set probs, hint: should be 0 or 1",
        index=1002)

    num_inputs = Parameter(2,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="""Number of input dimensions, adjusted automatically by 'add'
        (stored observations are dropped when it changes)""",
        errmsg="unable to set input or target dimensions",
        index=1003)


    def __init__(self, name=None, strict=None, **kwargs):
        """
        Parameters
        ----------
        name : str, optional
          Name to report on the console, the host name of the object by
          default.
        strict : bool or None, optional
          If True, failures inside message handlers propagate as
          exceptions instead of being reported on the console.  If None,
          ``[objects] raise errors`` of the configuration decides.
        **kwargs
          Values for attributes of the object or of its learner.
        """
        own = dict([(k, v) for k, v in kwargs.items() if k in self.params])
        rest = dict([(k, v) for k, v in kwargs.items() if not k in own])
        if not 'num_inputs' in own:
            own['num_inputs'] = self._default_num_inputs \
                or cfg.get_as_dtype('objects', 'num inputs', int, default=2)
        ClassWithCollections.__init__(self, **own)

        self.name = name or self._host_name
        if strict is None:
            strict = cfg.getboolean('objects', 'raise errors', default=False)
        self.strict = strict

        self.outlets = [Outlet(i, doc) for i, doc in
                        enumerate(self._outlets_doc)]

        ninputs = self.params.num_inputs
        self._datasets = [ClassificationData(ninputs),
                          RegressionData(ninputs),
                          TimeSeriesClassificationData(ninputs),
                          UnlabelledData(ninputs)]
        self._time_series = TimeSeries(ninputs)
        self._recording = False
        self._current_label = 0
        self._data_type = self._default_data_type

        self._learner = self._create_learner(**rest)

        if __debug__:
            debug('OBJ', "Created %s", (self,))


    def __repr__(self, prefixes=None):
        prefixes = prefixes or []
        if self.name != self._host_name:
            prefixes = prefixes + ['name=%r' % self.name]
        return super(MLObject, self).__repr__(
            prefixes=prefixes + _repr_attrs(self, ['strict'], default=False))


    def __str__(self):
        return "%s(%s)" % (self._host_name, self.name)


    def _create_learner(self, **kwargs):
        """Construct the learner of the object"""
        if self._learner_class is None:
            if len(kwargs):
                raise TypeError("Unexpected keyword argument(s) %s for %s"
                                % (', '.join(sorted(kwargs)), self))
            return None
        return self._learner_class(**kwargs)


    #
    # Console and outlets
    #
    def post(self, msg):
        """Post an informative message to the host console"""
        console.post(self.name, msg)


    def error(self, msg):
        """Report an error on the host console"""
        console.error(self.name, msg)


    @property
    def general_outlet(self):
        """The last outlet, carrying tagged status messages"""
        return self.outlets[-1]


    def _status(self, selector, *atoms):
        """Send a tagged message from the general purpose outlet"""
        self.general_outlet(selector, *atoms)


    def connect(self, listener, outlet=None):
        """Connect `listener` to one (or, if None, every) outlet

        The listener is called with the outlet, the selector and the atoms
        when connected to all outlets, and with the selector and the
        atoms otherwise.
        """
        if outlet is not None:
            self.outlets[outlet].connect(listener)
            return
        for o in self.outlets:
            o.connect(lambda selector, atoms, o=o: listener(o, selector, atoms))


    #
    # Data and learner access
    #
    @property
    def learner(self):
        return self._learner


    @property
    def data_type(self):
        return self._data_type


    def _set_data_type(self, data_type):
        if not data_type in range(len(DataType.names)):
            raise ValueError("invalid data type: %r" % (data_type,))
        if data_type == self._data_type:
            return
        if __debug__:
            debug('OBJ', "Switching %s to data type %s",
                  (self, DataType.names[data_type]))
        self._data_type = data_type
        ds = self.dataset
        if ds.nfeatures != self.params.num_inputs:
            self._resize(self.params.num_inputs)


    @property
    def dataset(self):
        """Container of the active data type"""
        return self._datasets[self._data_type]


    def get_dataset(self, data_type):
        return self._datasets[data_type]


    @property
    def recording(self):
        return self._recording


    def _num_targets(self):
        """Number of leading target atoms of 'add' for the active data type"""
        data_type = self._data_type
        if data_type == DataType.LABELLED_REGRESSION:
            return self.dataset.ntargets
        elif data_type == DataType.UNLABELLED_CLASSIFICATION:
            return 0
        return 1


    def _resize(self, ninputs):
        """Set the number of inputs of the active container"""
        self.dataset.set_num_dimensions(ninputs)
        if self._data_type == DataType.LABELLED_TIME_SERIES_CLASSIFICATION:
            self._time_series = TimeSeries(ninputs)
        self.params.num_inputs = ninputs


    def _configure_learner(self):
        """Pass values of the object's attributes on to the learner"""
        learner = self._learner
        if learner is not None and 'scaling' in learner.params:
            learner.params.scaling = self.params.scaling


    def _learner_loaded(self, learner):
        """Adopt a learner read from a model file"""
        self._learner = learner
        if 'scaling' in learner.params:
            self.params.scaling = learner.params.scaling


    #
    # Attributes
    #
    def _find_attribute(self, name):
        """Return the `Parameter` behind an attribute, or None"""
        if name in self.params:
            return self.params[name]
        learner = self._learner
        if learner is not None and name in learner.params \
           and not name in self._hidden_learner_params:
            return learner.params[name]
        return None


    def attribute_names(self):
        """Names of all attributes, in the order of the help listing"""
        return [name for name, _ in self._attributes_doc()]


    def _attributes_doc(self):
        docs = []
        if self._learner is not None:
            docs += [(name, doc) for name, doc in self._learner._paramsdoc
                     if not name in self._hidden_learner_params]
        docs += list(self._paramsdoc)
        return docs


    def set_attribute(self, name, atoms):
        """Set an attribute from a list of atoms

        Returns
        -------
        bool
          Whether the value was accepted.  Rejected values are reported
          on the console.
        """
        param = self._find_attribute(name)
        if param is None:
            raise KeyError("%s has no attribute %r" % (self, name))
        if len(atoms) == 1:
            value = atoms[0]
        else:
            value = list(atoms)
        try:
            param.value = value
        except (ValueError, TypeError) as e:
            if __debug__:
                debug('OBJ', "%s rejected %s=%r: %s", (self, name, value, e))
            self.error(getattr(param, 'errmsg', None) or str(e))
            return False
        self._attribute_changed(name)
        return True


    def get_attribute(self, name):
        """Value of an attribute as a list of atoms"""
        param = self._find_attribute(name)
        if param is None:
            raise KeyError("%s has no attribute %r" % (self, name))
        value = param.value
        if isinstance(value, dict):
            return ['%s:%s' % (format_atom(k), format_atom(v))
                    for k, v in sorted(value.items())]
        if isinstance(value, (list, tuple)):
            return list(value)
        if isinstance(value, bool):
            return [int(value)]
        if value is None:
            return []
        return [value]


    def _attribute_changed(self, name):
        """Hook invoked after an attribute got a new value from a message"""
        if name == 'num_inputs':
            self._resize(self.params.num_inputs)


    #
    # Message dispatch
    #
    def send(self, selector, *atoms):
        """Deliver a message to the object

        Output messages are delivered to the listeners of the outlets
        before this call returns.
        """
        selector = str(selector)
        atoms = list(atoms)
        if __debug__:
            debug('OBJ', "%s <- %s", (self, format_message(selector, atoms)))
        try:
            self._dispatch(selector, atoms)
        except (ValueError, LearnerError, IOError) as e:
            if self.strict:
                raise
            self.error(str(e))


    def _dispatch(self, selector, atoms):
        selector = self._message_aliases.get(selector, selector)
        handler = getattr(self, '_msg_' + selector, None)
        if handler is not None:
            handler(atoms)
        elif self._find_attribute(selector) is not None:
            self.set_attribute(selector, atoms)
        elif selector.startswith('get') \
             and self._find_attribute(selector[3:]) is not None:
            name = selector[3:]
            self._status(name, *self.get_attribute(name))
        else:
            self.error("messages with the selector '%s' are not supported"
                       % selector)


    def _numeric(self, atoms):
        """Convert atoms into floats, reporting symbols as an error"""
        try:
            return [float(a) for a in atoms]
        except (TypeError, ValueError):
            self.error("invalid input, all values must be numbers, got %s"
                       % format_message('', atoms).strip())
            return None


    @staticmethod
    def _path(atoms):
        return ' '.join([format_atom(a) for a in atoms]).strip()


    def _msg_add(self, atoms):
        if len(atoms) < 2:
            self.error("invalid input length, must contain at least 2 values")
            return
        values = self._numeric(atoms)
        if values is None:
            return

        ntargets = self._num_targets()
        if len(values) != self.params.num_inputs + ntargets:
            ninputs = len(values) - ntargets
            if ninputs < 1:
                self.error("invalid input length, expected at least %d"
                           % (ntargets + 1))
                return
            self.post("new input vector size, adjusting num_inputs to %d"
                      % ninputs)
            self._resize(ninputs)

        targets, inputs = values[:ntargets], values[ntargets:]
        data_type = self._data_type
        if data_type in (DataType.LABELLED_CLASSIFICATION,
                         DataType.LABELLED_TIME_SERIES_CLASSIFICATION):
            try:
                label = check_class_label(targets[0])
            except ValueError as e:
                self.error(str(e))
                return
            if data_type == DataType.LABELLED_CLASSIFICATION:
                self.dataset.add_sample(label, inputs)
            elif self._recording:
                # a new label closes the running sequence
                if label != self._current_label:
                    self._record(False)
                    self._record(True)
                self._current_label = label
                self._time_series.append(inputs)
            else:
                self.error("cannot add time series data if recording is off, "
                           "send 'record 1' to start recording")
        elif data_type == DataType.LABELLED_REGRESSION:
            self.dataset.add_sample(inputs, targets)
        else:
            self.dataset.add_sample(inputs)


    def _record(self, state):
        """Switch recording, storing the recorded sequence when stopping

        Returns False if recording does not apply to the active data type.
        """
        if self._data_type != DataType.LABELLED_TIME_SERIES_CLASSIFICATION:
            self.error("record method only valid for time series data")
            return False
        self._recording = state
        if not state and self._current_label != 0 \
           and self._time_series.nrows > 0:
            self.dataset.add_sample(self._current_label,
                                    self._time_series.as_array())
            if __debug__:
                debug('OBJ_', "Stored sequence of %d rows with label %d",
                      (self._time_series.nrows, self._current_label))
        self._time_series.clear()
        self._current_label = 0
        return True


    def _msg_record(self, atoms):
        try:
            state = EnsureBool()(atoms[0] if len(atoms) else 0)
        except ValueError:
            self.error("record expects 0 or 1")
            return
        if self._record(state):
            self.post("recording: %s" % (self._recording and "on" or "off"))


    def _msg_write(self, atoms):
        ds = self.dataset
        if ds.nsamples == 0:
            self.error("no observations added, use 'add' to add training data")
            self._status('write', 0)
            return

        path = self._path(atoms)
        if not path:
            self.error("path string is empty")
            return

        data_path, model_path = get_data_file_paths(path)
        success = False

        if data_path:
            try:
                save_dataset(ds, data_path)
                success = True
            except (IOError, OSError, ValueError) as e:
                if __debug__:
                    debug('OBJ', "Writing %s failed: %s", (data_path, e))
                success = False
                self.error("unable to write training data to path: %s"
                           % data_path)

        if model_path:
            learner = self._learner
            if learner is not None and learner.is_trained:
                try:
                    learner.save(model_path, name=self._host_name)
                    success = True
                except (IOError, OSError) as e:
                    if __debug__:
                        debug('OBJ', "Writing %s failed: %s", (model_path, e))
                    success = False
                    self.error("unable to write model to path: %s"
                               % model_path)
            elif get_file_extension_from_path(path) == MODEL_EXTENSION:
                self.error("model not trained, use 'train' to train a model")

        self._status('write', int(success))


    def _read_model(self, model_path):
        if self._learner_class is None:
            raise LearnerError("%s has no model to read" % self)
        return self._learner_class.load(model_path)


    def _msg_read(self, atoms):
        path = self._path(atoms)
        if not path:
            self.error("path string is empty")
            return

        data_path, model_path = get_data_file_paths(path)
        success = False

        if data_path:
            try:
                ds = load_dataset(data_path, expected=type(self.dataset))
                self._datasets[self._data_type] = ds
                self.params.num_inputs = ds.nfeatures
                self._dataset_loaded(ds)
                success = True
            except (IOError, OSError, ValueError) as e:
                if __debug__:
                    debug('OBJ', "Reading %s failed: %s", (data_path, e))
                success = False
                self.error("unable to read training data from path: %s"
                           % data_path)

        if model_path:
            try:
                self._learner_loaded(self._read_model(model_path))
                success = True
            except (IOError, OSError, ValueError, LearnerError) as e:
                if __debug__:
                    debug('OBJ', "Reading %s failed: %s", (model_path, e))
                success = False
                self.error("unable to read model from path: %s" % model_path)

        self._status('read', int(success))


    def _dataset_loaded(self, ds):
        """Hook invoked after a container was read from a file"""
        if self._data_type == DataType.LABELLED_TIME_SERIES_CLASSIFICATION:
            self._time_series = TimeSeries(ds.nfeatures)


    def _msg_train(self, atoms):
        self.error("function not implemented")


    def _msg_map(self, atoms):
        self.error("function not implemented")


    def _msg_clear(self, atoms):
        if self._learner is not None:
            self._learner.untrain()
        for ds in self._datasets:
            ds.clear()
        self._time_series.clear()
        self._current_label = 0
        self._status('clear', 1)


    def _msg_help(self, atoms):
        self.post(self.usage())


    def usage(self):
        """Help text listing attributes and methods"""
        lines = [_POST_SEPARATOR, 'Attributes:', _POST_SEPARATOR]
        lines += [doc for _, doc in self._attributes_doc()]
        lines += [_POST_SEPARATOR, 'Methods:', _POST_SEPARATOR]
        lines += ['%s:\t%s' % (name, doc) for name, doc in self._methods_help]
        lines += [_POST_SEPARATOR]
        return "\n".join(lines)
