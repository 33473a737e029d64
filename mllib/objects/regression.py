# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Objects mapping input vectors onto output vectors"""

__docformat__ = 'restructuredtext'

import numpy as np

from mllib.base.param import Parameter
from mllib.base.constraints import EnsureInt, EnsureRange, Constraints
from mllib.objects.base import DataType
from mllib.objects.classification import MLClassificationObject


class MLRegressionObject(MLClassificationObject):
    """Object trained on input and target vectors

    ``add`` takes the ``num_outputs`` target values first, followed by the
    inputs.  ``map`` sends the output vector from the first outlet.
    """

    __tags__ = ['regression']

    _default_data_type = DataType.LABELLED_REGRESSION

    _methods_help = tuple(
        [(name, {'add': "list comprising num_outputs target values "
                        "followed by n features; <target 1> ... <feature 1> "
                        "<feature 2> etc",
                 'map': "give the regression value for the input feature "
                        "vector"}.get(name, doc))
         for name, doc in MLClassificationObject._methods_help])

    num_outputs = Parameter(1,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="""Number of target (output) dimensions (stored observations
        are dropped when it changes)""",
        errmsg="unable to set input or target dimensions",
        index=1004)


    def __init__(self, **kwargs):
        MLClassificationObject.__init__(self, **kwargs)
        self._resize_targets()


    def _resize_targets(self):
        """Apply num_inputs and num_outputs to the regression container"""
        self.get_dataset(DataType.LABELLED_REGRESSION) \
            .set_input_and_target_dimensions(self.params.num_inputs,
                                             self.params.num_outputs)


    def _attribute_changed(self, name):
        if name == 'num_outputs':
            self._resize_targets()
        else:
            MLClassificationObject._attribute_changed(self, name)


    def _dataset_loaded(self, ds):
        MLClassificationObject._dataset_loaded(self, ds)
        if self._data_type == DataType.LABELLED_REGRESSION:
            self.params.num_outputs = ds.ntargets


    def _msg_map(self, atoms):
        samples = self._map_inputs(atoms)
        if samples is None:
            return
        outputs = np.ravel(self._learner.predict(samples)[0])
        if len(outputs) == 1:
            self.outlets[0]('float', float(outputs[0]))
        else:
            self.outlets[0]('list', *[float(o) for o in outputs])
