# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Wrap the libsvm package (as shipped by scikit-learn) into a very simple
class interface.

All five libsvm machines are available through a single `SVM` learner
whose `type` parameter selects the machine:

========  ============  =============================
 `type`    machine       data
========  ============  =============================
 0         C_SVC         labelled classification
 1         NU_SVC        labelled classification
 2         ONE_CLASS     unlabelled
 3         EPSILON_SVR   labelled regression
 4         NU_SVR        labelled regression
========  ============  =============================
"""

__docformat__ = 'restructuredtext'

import numpy as np

from mllib.base import externals, warning
from mllib.base.param import Parameter
from mllib.base.constraints import EnsureValue, EnsureInt, EnsureFloat, \
     EnsureRange, EnsureBool, Constraints
from mllib.base.learner import FailedToTrainError
from mllib.clfs.skl import SKLLearnerAdapter
from mllib._random import get_random_state

if __debug__:
    from mllib.base import debug

externals.exists('skl', raise_=True)

from sklearn.base import clone
from sklearn.svm import SVC, NuSVC, OneClassSVM, SVR, NuSVR
from sklearn.calibration import CalibratedClassifierCV
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import MinMaxScaler
from sklearn.model_selection import KFold, StratifiedKFold

__all__ = ['SVM', 'EnsureClassWeights']


class EnsureClassWeights(EnsureValue):
    """Ensure a mapping of class labels onto weights

    Accepts a dictionary or a list of ``class:weight`` strings.
    """

    def __call__(self, value):
        if isinstance(value, dict):
            items = value.items()
        else:
            if isinstance(value, str) or not hasattr(value, '__iter__'):
                value = [value]
            items = []
            for pair in value:
                pair = str(pair)
                if not ':' in pair:
                    raise ValueError("no ':' found, weights must be a list of "
                                     "class:weight pairs")
                label, weight = pair.split(':', 1)
                items.append((label, weight))
        try:
            return dict([(int(float(label)), float(weight))
                         for label, weight in items])
        except ValueError:
            raise ValueError("weights must be a list of class:weight pairs "
                             "with numeric class and weight")

    def short_description(self):
        return 'list(class:weight)'

    def long_description(self):
        return "value must be a list of class:weight pairs"



class SVM(SKLLearnerAdapter):
    """Support Vector Machine learner.

    Training and prediction are done by libsvm as wrapped by
    scikit-learn.  Parameters keep the libsvm meaning, so that e.g.
    ``gamma=0`` stands for ``1/num_features``.
    """

    C_SVC, NU_SVC, ONE_CLASS, EPSILON_SVR, NU_SVR = range(5)
    LINEAR, POLY, RBF, SIGMOID, PRECOMPUTED = range(5)

    _SVM_TYPES = ('C_SVC', 'NU_SVC', 'ONE_CLASS', 'EPSILON_SVR', 'NU_SVR')
    _KERNEL_TYPES = ('LINEAR', 'POLY', 'RBF', 'SIGMOID', 'PRECOMPUTED')

    _SKL_ESTIMATORS = (SVC, NuSVC, OneClassSVM, SVR, NuSVR)

    _SKL_KERNELS = ('linear', 'poly', 'rbf', 'sigmoid', 'precomputed')

    # internal folds of the probability model, as in libsvm
    _PROBABILITY_FOLDS = 5

    __tags__ = SKLLearnerAdapter.__tags__ + ['svm', 'libsvm']

    type = Parameter(C_SVC,
        constraints=Constraints(EnsureInt(), EnsureRange(min=0, max=4)),
        doc="""SVM type: 0 C_SVC, 1 NU_SVC, 2 ONE_CLASS, 3 EPSILON_SVR,
        4 NU_SVR""",
        errmsg="invalid SVM type, send a 'help' message to the first inlet "
               "for available types",
        index=1)

    kernel = Parameter(RBF,
        constraints=Constraints(EnsureInt(), EnsureRange(min=0, max=4)),
        doc="""Kernel type: 0 LINEAR (u'*v), 1 POLY ((gamma*u'*v + coef0)^degree),
        2 RBF (exp(-gamma*|u-v|^2)), 3 SIGMOID (tanh(gamma*u'*v + coef0)),
        4 PRECOMPUTED (kernel values in the input vectors)""",
        errmsg="invalid kernel type, send a 'help' message to the first "
               "inlet for available types",
        index=2)

    degree = Parameter(3,
        constraints=Constraints(EnsureInt(), EnsureRange(min=0)),
        doc="Degree of the polynomial kernel",
        errmsg="unable to set degree",
        index=3)

    gamma = Parameter(0.0,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=0.0)),
        doc="""Gamma of the POLY, RBF and SIGMOID kernels, 0 stands for
        1/num_features""",
        errmsg="unable to set gamma",
        index=4)

    coef0 = Parameter(0.0, constraints=EnsureFloat(),
        doc="Coefficient of the POLY and SIGMOID kernels",
        errmsg="unable to set coef0",
        index=5)

    cost = Parameter(1.0,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=1e-12)),
        doc="Cost (C) of the C_SVC, EPSILON_SVR and NU_SVR machines",
        errmsg="unable to set cost",
        index=6)

    nu = Parameter(0.5,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=1e-12, max=1.0)),
        doc="Nu of the NU_SVC, ONE_CLASS and NU_SVR machines",
        errmsg="unable to set nu",
        index=7)

    epsilon = Parameter(1e-3,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=1e-12)),
        doc="Tolerance of the termination criterion",
        errmsg="unable to set epsilon",
        index=8)

    tube_epsilon = Parameter(0.1,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=0.0)),
        doc="Epsilon of the loss function of EPSILON_SVR",
        errmsg="unable to set tube epsilon",
        index=9)

    cachesize = Parameter(100.0,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=1e-12)),
        doc="Kernel cache size in MB",
        errmsg="unable to set cache size",
        index=10)

    shrinking = Parameter(True, constraints=EnsureBool(),
        doc="Whether to use the shrinking heuristics",
        errmsg="shrinking must either be 0 (off) or 1 (on)",
        index=11)

    probability = Parameter(False, constraints=EnsureBool(),
        doc="Whether to train a model for probability estimates",
        errmsg="unable to set probability estimates, hint: should be 0 or 1",
        index=12)

    weights = Parameter({}, constraints=EnsureClassWeights(),
        doc="""Weights of the cost per class label for C_SVC (as a list of
        class:weight pairs)""",
        index=13)


    def __init__(self, **kwargs):
        self._probability_model = None
        SKLLearnerAdapter.__init__(self, SVC(), **kwargs)


    @property
    def __is_regression__(self):
        return self.params.type in (self.EPSILON_SVR, self.NU_SVR)


    @property
    def is_one_class(self):
        return self.params.type == self.ONE_CLASS


    def _scaling_applicable(self, ds):
        return self.params.kernel != self.PRECOMPUTED


    def _get_skl_learner(self, dataset):
        """Construct the libsvm machine selected by `type`"""
        p = self.params
        svm_type = p.type
        kwargs = dict(kernel=self._SKL_KERNELS[p.kernel],
                      degree=p.degree,
                      gamma=p.gamma or 'auto',
                      coef0=p.coef0,
                      tol=p.epsilon,
                      cache_size=p.cachesize,
                      shrinking=p.shrinking)
        if svm_type in (self.C_SVC, self.EPSILON_SVR, self.NU_SVR):
            kwargs['C'] = p.cost
        if svm_type in (self.NU_SVC, self.ONE_CLASS, self.NU_SVR):
            kwargs['nu'] = p.nu
        if svm_type == self.EPSILON_SVR:
            kwargs['epsilon'] = p.tube_epsilon
        if svm_type in (self.C_SVC, self.NU_SVC):
            kwargs['class_weight'] = p.weights or None
            kwargs['random_state'] = get_random_state()

        learner = self._SKL_ESTIMATORS[svm_type](**kwargs)
        if __debug__:
            debug('SVM', "Constructed %s machine %r for %s",
                  (self._SVM_TYPES[svm_type], learner, self))
        return learner


    def _get_targets(self, dataset):
        if self.is_one_class:
            return None
        return super(SVM, self)._get_targets(dataset)


    def _train(self, dataset):
        """Train SVM
        """
        p = self.params
        if p.kernel == self.PRECOMPUTED and dataset.nfeatures != dataset.nsamples:
            raise FailedToTrainError(
                  "PRECOMPUTED kernel requires a square kernel matrix, got "
                  "%d samples with %d values each"
                  % (dataset.nsamples, dataset.nfeatures))
        if self.__is_regression__ and dataset.targets.shape[1] != 1:
            raise FailedToTrainError(
                  "%s regression supports a single target dimension, got %d"
                  % (self._SVM_TYPES[p.type], dataset.targets.shape[1]))
        super(SVM, self)._train(dataset)
        if p.probability and p.type in (self.C_SVC, self.NU_SVC):
            self._probability_model = self._train_probability_model(dataset)
        if __debug__:
            debug('SVM', "Trained %s with %d support vectors",
                  (self, self.nr_sv))


    def _train_probability_model(self, dataset):
        """Platt scaling of the decision values, fitted on internal folds
        of the training data like libsvm does"""
        targets = self._get_targets(dataset)
        nfolds = min(self._PROBABILITY_FOLDS,
                     int(np.unique(targets, return_counts=True)[1].min()))
        if nfolds < 2:
            warning("%s needs at least two samples per class for probability "
                    "estimates, none will be available" % self)
            return None
        model = CalibratedClassifierCV(
            self._get_skl_learner(dataset), method='sigmoid', ensemble=False,
            cv=StratifiedKFold(n_splits=nfolds, shuffle=True,
                               random_state=get_random_state()))
        try:
            model.fit(self._get_samples(dataset), targets)
        except ValueError as e:
            raise FailedToTrainError(
                  "Failed to train the probability model of %s: %s" % (self, e))
        if __debug__:
            debug('SVM', "Fitted probability model of %s on %d folds",
                  (self, nfolds))
        return model


    @property
    def _probability_learner(self):
        return self._probability_model


    def _untrain(self):
        super(SVM, self)._untrain()
        self._probability_model = None


    def _predict(self, data):
        """Predict values for the data
        """
        predictions = super(SVM, self)._predict(data)
        learner = self._trained_learner
        if not self.__is_regression__ and hasattr(learner, 'decision_function'):
            self.ca.estimates = learner.decision_function(data)
        return predictions


    @property
    def nr_class(self):
        """Number of classes of the trained model (2 for regression and
        one-class machines)"""
        classes = self.classes
        if classes is None:
            return 2
        return len(classes)


    @property
    def nr_sv(self):
        """Total number of support vectors of the trained model"""
        return len(self._trained_learner.support_)


    @property
    def has_probability_model(self):
        """Whether the trained model provides probability estimates"""
        return self._probability_model is not None


    def cross_validate(self, dataset, nfolds=2):
        """Run n-fold cross validation of the configured machine

        Parameters
        ----------
        dataset
          Training data container matching the machine type.
        nfolds : int
          Number of folds, at least 2.

        Returns
        -------
        tuple
          ``(accuracy,)`` in percent for classification and one-class
          machines, ``(mean_squared_error, squared_correlation_coefficient)``
          for regression machines.
        """
        if nfolds < 2:
            raise ValueError("n-fold cross validation: n must >= 2")
        if self.__is_regression__ and dataset.targets.shape[1] != 1:
            raise FailedToTrainError(
                  "cross validation supports a single target dimension")

        estimator = self._get_skl_learner(dataset)
        if self.params.scaling and self._scaling_applicable(dataset):
            estimator = make_pipeline(MinMaxScaler(), estimator)

        samples = dataset.samples
        if self.is_one_class:
            targets = np.ones(len(samples))
        else:
            targets = self._get_targets(dataset)

        if self.__is_regression__ or self.is_one_class:
            cv = KFold(n_splits=nfolds, shuffle=True,
                       random_state=get_random_state())
        else:
            cv = StratifiedKFold(n_splits=nfolds, shuffle=True,
                                 random_state=get_random_state())

        if __debug__:
            debug('SVM', "Cross-validating %s with %d folds on %s",
                  (self, nfolds, dataset))
        predictions = np.zeros(len(targets))
        try:
            for train, test in cv.split(samples, targets):
                fold_targets = np.unique(targets[train])
                if not (self.__is_regression__ or self.is_one_class) \
                   and len(fold_targets) < 2:
                    # nothing to discriminate, the only class is the answer
                    predictions[test] = fold_targets[0]
                    continue
                fold = clone(estimator)
                if self.is_one_class:
                    fold.fit(samples[train])
                else:
                    fold.fit(samples[train], targets[train])
                predictions[test] = fold.predict(samples[test])
        except (ValueError, np.linalg.LinAlgError) as e:
            raise FailedToTrainError("Cross validation of %s failed: %s"
                                     % (self, e))

        if not self.__is_regression__:
            return (100.0 * np.mean(predictions == targets),)

        l = float(len(targets))
        v, y = np.asarray(predictions, dtype=float), targets
        sumv, sumy = v.sum(), y.sum()
        sumvv, sumyy, sumvy = (v * v).sum(), (y * y).sum(), (v * y).sum()
        mse = np.mean((v - y) ** 2)
        with np.errstate(divide='ignore', invalid='ignore'):
            scc = ((l * sumvy - sumv * sumy) ** 2) \
                  / ((l * sumvv - sumv ** 2) * (l * sumyy - sumy ** 2))
        return (mse, float(scc))
