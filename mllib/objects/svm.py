# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""``ml.svm``: Support Vector Machines using the svm library"""

__docformat__ = 'restructuredtext'

from mllib.base.param import Parameter
from mllib.base.constraints import EnsureBool, EnsureInt, EnsureRange, \
     Constraints
from mllib.base.learner import LearnerError
from mllib.clfs.svm import SVM
from mllib.objects.base import DataType
from mllib.objects.regression import MLRegressionObject

if __debug__:
    from mllib.base import debug


_DATA_TYPES = {
    SVM.C_SVC: DataType.LABELLED_CLASSIFICATION,
    SVM.NU_SVC: DataType.LABELLED_CLASSIFICATION,
    SVM.ONE_CLASS: DataType.UNLABELLED_CLASSIFICATION,
    SVM.EPSILON_SVR: DataType.LABELLED_REGRESSION,
    SVM.NU_SVR: DataType.LABELLED_REGRESSION,
    }


class MLSVMObject(MLRegressionObject):
    """Support Vector Machines for classification, regression and
    novelty detection

    The SVM ``type`` decides about the data the object is trained on:
    labelled vectors for C_SVC and NU_SVC, plain vectors for ONE_CLASS
    and input/target vectors for EPSILON_SVR and NU_SVR.

    ``train`` emits ``train <num_classes> <num_support_vectors>`` (or
    ``train -1 -1`` on failure), ``cross_validation`` emits the results of
    an n-fold cross validation as ``cross_validation <values...>``.
    """

    __tags__ = ['classification', 'regression', 'svm', 'libsvm', 'skl']

    _host_name = 'ml.svm'

    _learner_class = SVM

    _hidden_learner_params = ('scaling', 'probability')

    _message_aliases = {'classify': 'map'}

    _methods_help = (
        ('add', "list comprising a class id followed by n features; "
                "<class> <feature 1> <feature 2> etc"),
        ('write', "write training examples and model, first argument gives "
                  "path to write file"),
        ('read', "read training examples and model, first argument gives "
                 "path to the read location"),
        ('cross_validation', "perform cross-validation"),
        ('train', "train the SVM based on labelled vectors added with 'add'"),
        ('clear', "clear the stored training data and model"),
        ('map', "give the class (or the regression value) of the input "
                "feature vector provided as a list (alias: classify)"),
        ('help', "post this usage statement to the console"),
        )

    estimates = Parameter(False, constraints=EnsureBool(),
        doc="""Whether to train a SVC model for probability estimates, and
        to send them after mapping""",
        errmsg="estimates must either be 0 (off) or 1 (on)",
        index=1010)

    mode = Parameter(2,
        constraints=Constraints(EnsureInt(), EnsureRange(min=2)),
        doc="""Number of folds (n) of the n-fold cross validation""",
        errmsg="n-fold cross validation: n must >= 2",
        index=1011)


    def __init__(self, **kwargs):
        MLRegressionObject.__init__(self, **kwargs)
        self._set_data_type(_DATA_TYPES[self._learner.params.type])


    def _attribute_changed(self, name):
        if name == 'type':
            self._set_data_type(_DATA_TYPES[self._learner.params.type])
        MLRegressionObject._attribute_changed(self, name)


    def _configure_learner(self):
        MLRegressionObject._configure_learner(self)
        self._learner.params.probability = self.params.estimates


    def _learner_loaded(self, learner):
        MLRegressionObject._learner_loaded(self, learner)
        self.params.estimates = learner.params.probability
        self._set_data_type(_DATA_TYPES[learner.params.type])


    def _msg_train(self, atoms):
        if not self._train_learner():
            self.error("training model failed")
            self._status('train', -1, -1)
            return
        learner = self._learner
        if __debug__:
            debug('OBJ', "%s trained %d classes with %d support vectors",
                  (self, learner.nr_class, learner.nr_sv))
        self._status('train', learner.nr_class, learner.nr_sv)


    def _msg_map(self, atoms):
        samples = self._map_inputs(atoms)
        if samples is None:
            return
        learner = self._learner
        want_estimates = self.params.estimates or self.params.probs
        if want_estimates and not learner.has_probability_model:
            self.error("probability attribute set to 1, but model doesn't "
                       "support probability")
            want_estimates = False
        learner.ca.enable('probabilities', want_estimates)

        prediction = learner.predict(samples)[0]

        if want_estimates:
            self._emit_probabilities('estimates')
        if self._data_type == DataType.LABELLED_REGRESSION:
            self.outlets[0]('float', float(prediction))
        else:
            self.outlets[0]('float', int(prediction))


    def _msg_cross_validation(self, atoms):
        ds = self.dataset
        if ds.nsamples == 0:
            self.error("no observations added, use 'add' to add training data")
            return
        self._configure_learner()
        try:
            result = self._learner.cross_validate(ds, self.params.mode)
        except (LearnerError, ValueError) as e:
            if __debug__:
                debug('OBJ', "Cross validation of %s failed: %s", (self, e))
            self.error("cross validation failed: %s" % e)
            return

        if self._data_type == DataType.LABELLED_REGRESSION:
            mse, scc = result
            self.post("cross validation mean squared error = %g" % mse)
            self.post("cross validation squared correlation coefficient = %g"
                      % scc)
        else:
            self.post("cross validation accuracy = %g%%" % result[0])
        self._status('cross_validation', *[float(r) for r in result])
