# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Generic wrappers for learners provided by scikit-learn (AKA sklearn)

Besides the generic `SKLLearnerAdapter` this module provides the learners
behind the supplementary host objects: k-nearest neighbours, naive Bayes,
decision trees, random forests, AdaBoost, logistic and linear regression
and multi-layer perceptrons.  Their parameters are mapped onto the
constructor arguments of the scikit-learn estimators at training time.
"""

__docformat__ = 'restructuredtext'

import numpy as np

from mllib.base import warning, externals
from mllib.base.param import Parameter
from mllib.base.constraints import EnsureInt, EnsureFloat, EnsureRange, \
     EnsureNone, AltConstraints, Constraints
from mllib.base.learner import FailedToTrainError, FailedToPredictError, \
     DegenerateInputError
from mllib.clfs.base import Classifier
from mllib._random import get_random_state

if __debug__:
    from mllib.base import debug

# do conditional to be able to build module reference
externals.exists('skl', raise_=True)

from sklearn.base import clone
from sklearn.neighbors import KNeighborsClassifier
from sklearn.naive_bayes import GaussianNB
from sklearn.tree import DecisionTreeClassifier
from sklearn.ensemble import RandomForestClassifier, AdaBoostClassifier
from sklearn.linear_model import LogisticRegression, LinearRegression
from sklearn.neural_network import MLPRegressor


class SKLLearnerAdapter(Classifier):
    """Classifier backed by a scikit-learn estimator

    `train` maps onto ``fit`` and `predict` onto ``predict`` of the
    estimator, so the conditional attributes of `Classifier` are filled
    like for any other learner.

    The wrapped instance serves as a template: every training fits a
    fresh clone of it, configured from the parameters of the adapter
    listed in `_SKL_PARAMS`.

    Examples
    --------
    >>> from sklearn.neighbors import KNeighborsClassifier
    >>> from mllib.clfs.skl import SKLLearnerAdapter
    >>> clf = SKLLearnerAdapter(KNeighborsClassifier(n_neighbors=1))
    """

    __tags__ = ['skl']

    _SKL_PARAMS = {}
    """Mapping of parameter names onto constructor arguments of the
    wrapped learner"""

    def __init__(self, skl_learner, tags=None, **kwargs):
        """
        Parameters
        ----------
        skl_learner
          Estimator with ``fit`` and ``predict``.  With ``predict_proba``
          the `probabilities` attribute gets filled too.
        tags : list of str
          Tags added to the ones of the class, e.g. 'regression'.
        """

        self._skl_learner = skl_learner
        self._trained_learner = None
        if tags:
            self.__tags__ = self.__tags__ + tags
        Classifier.__init__(self, **kwargs)


    def __repr__(self, prefixes=None):
        return Classifier.__repr__(
            self, prefixes=[repr(self._skl_learner)] + list(prefixes or []))


    def _get_skl_params(self, dataset):
        """Constructor arguments for the learner to be trained on `dataset`
        """
        return dict([(sklname, self.params[pname].value)
                     for pname, sklname in self._SKL_PARAMS.items()])


    def _get_skl_learner(self, dataset):
        """Return a fresh (untrained) learner configured from the parameters
        """
        learner = clone(self._skl_learner)
        params = self._get_skl_params(dataset)
        if 'random_state' in learner.get_params():
            params.setdefault('random_state', get_random_state())
        if len(params):
            learner.set_params(**params)
        if __debug__:
            debug('SKL', "Constructed %r for training %s", (learner, self))
        return learner


    def _get_targets(self, dataset):
        """Targets to fit against, None for unlabelled data"""
        targets = getattr(dataset, 'targets', None)
        if targets is None:
            return None
        if self.__is_regression__ and targets.ndim == 2 \
           and targets.shape[1] == 1:
            # single output regressions expect a flat target vector
            targets = targets.ravel()
        return targets


    def _train(self, dataset):
        """Train the skl learner using `dataset`.
        """
        targets = self._get_targets(dataset)
        if targets is not None and not self.__is_regression__ \
           and len(np.unique(targets)) < 2:
            raise DegenerateInputError(
                  "At least two classes are required to train %s, got %s"
                  % (self, np.unique(targets)))

        learner = self._get_skl_learner(dataset)
        args = (self._get_samples(dataset),)
        if targets is not None:
            args += (targets,)
        try:
            # train underlying learner
            learner.fit(*args)
        except (ValueError, np.linalg.LinAlgError) as e:
            raise FailedToTrainError(
                  "Failed to train %s on %s. Got '%s' during call to fit()."
                  % (self, dataset, e))
        self._trained_learner = learner


    def _predict(self, data):
        """Predict using the skl learner
        """
        learner = self._trained_learner
        try:
            res = learner.predict(data)
        except Exception as e:
            raise FailedToPredictError(
                  "Failed to predict %s on data of shape %s. Got '%s' during"
                  " call to predict()." % (self, data.shape, e))
        # probabilities only once predict() succeeded
        if self.ca.is_enabled('probabilities'):
            proba_learner = self._probability_learner
            if hasattr(proba_learner, 'predict_proba'):
                # predict() often computes these already
                self.ca.probabilities = proba_learner.predict_proba(data)
            else:
                warning("%s has no predict_proba() defined, so no probability"
                        " estimates could be extracted" % proba_learner)
        self.ca.estimates = res
        return res


    def _untrain(self):
        super(SKLLearnerAdapter, self)._untrain()
        self._trained_learner = None


    @property
    def _probability_learner(self):
        """Trained estimator giving the class probabilities"""
        return self._trained_learner


    @property
    def classes(self):
        """Class labels of the trained learner in the order of the columns
        of `probabilities`"""
        return getattr(self._trained_learner, 'classes_', None)



_positive_int = Constraints(EnsureInt(), EnsureRange(min=1))
_optional_positive_int = AltConstraints(
    Constraints(EnsureInt(), EnsureRange(min=1)), EnsureNone())


class KNNClassifier(SKLLearnerAdapter):
    """k-nearest neighbours classifier"""

    k = Parameter(10, constraints=_positive_int,
        doc="Number of neighbours to consider",
        errmsg="unable to set k")

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, KNeighborsClassifier(),
                                   tags=['knn'], **kwargs)

    def _get_skl_params(self, dataset):
        k = self.params.k
        if k > dataset.nsamples:
            warning("k=%d exceeds the number of training samples, using %d"
                    % (k, dataset.nsamples))
            k = dataset.nsamples
        return {'n_neighbors': k}



class ANBCClassifier(SKLLearnerAdapter):
    """Adaptive naive Bayes classifier (gaussian naive Bayes)"""

    var_smoothing = Parameter(1e-9,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=0.0)),
        doc="Portion of the largest variance of all features added to the "
            "variances for stability",
        errmsg="unable to set variance smoothing")

    _SKL_PARAMS = {'var_smoothing': 'var_smoothing'}

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, GaussianNB(), tags=['anbc'],
                                   **kwargs)



class DecisionTreeLearner(SKLLearnerAdapter):
    """Decision tree classifier"""

    max_depth = Parameter(None, constraints=_optional_positive_int,
        doc="Maximum depth of the tree, unlimited if None",
        errmsg="unable to set max depth")

    min_samples_split = Parameter(2,
        constraints=Constraints(EnsureInt(), EnsureRange(min=2)),
        doc="Minimum number of samples a node must hold to be split",
        errmsg="unable to set min samples split")

    _SKL_PARAMS = {'max_depth': 'max_depth',
                   'min_samples_split': 'min_samples_split'}

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, DecisionTreeClassifier(),
                                   tags=['dtree'], **kwargs)



class RandomForestLearner(SKLLearnerAdapter):
    """Random forest classifier"""

    num_trees = Parameter(10, constraints=_positive_int,
        doc="Number of trees in the forest",
        errmsg="unable to set number of trees")

    max_depth = Parameter(None, constraints=_optional_positive_int,
        doc="Maximum depth of each tree, unlimited if None",
        errmsg="unable to set max depth")

    _SKL_PARAMS = {'num_trees': 'n_estimators',
                   'max_depth': 'max_depth'}

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, RandomForestClassifier(),
                                   tags=['randforest'], **kwargs)



class AdaBoostLearner(SKLLearnerAdapter):
    """AdaBoost classifier over decision stumps"""

    num_boosting_iterations = Parameter(20, constraints=_positive_int,
        doc="Maximum number of boosting iterations",
        errmsg="unable to set number of boosting iterations")

    _SKL_PARAMS = {'num_boosting_iterations': 'n_estimators'}

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, AdaBoostClassifier(),
                                   tags=['adaboost'], **kwargs)



class LogisticRegressionLearner(SKLLearnerAdapter):
    """Logistic regression classifier"""

    cost = Parameter(1.0,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=1e-12)),
        doc="Inverse of the regularization strength",
        errmsg="unable to set cost")

    max_num_iterations = Parameter(100, constraints=_positive_int,
        doc="Maximum number of iterations of the solver",
        errmsg="unable to set max number of iterations")

    _SKL_PARAMS = {'cost': 'C',
                   'max_num_iterations': 'max_iter'}

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, LogisticRegression(),
                                   tags=['logreg'], **kwargs)



class LinearRegressionLearner(SKLLearnerAdapter):
    """Ordinary least squares linear regression"""

    __tags__ = SKLLearnerAdapter.__tags__ + ['regression']

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, LinearRegression(),
                                   tags=['linreg'], **kwargs)



class MLPRegressionLearner(SKLLearnerAdapter):
    """Multi-layer perceptron regression with a single hidden layer"""

    __tags__ = SKLLearnerAdapter.__tags__ + ['regression']

    num_hidden = Parameter(10, constraints=_positive_int,
        doc="Number of neurons in the hidden layer",
        errmsg="unable to set number of hidden neurons")

    learning_rate = Parameter(0.001,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=1e-12)),
        doc="Initial learning rate",
        errmsg="unable to set learning rate")

    max_num_iterations = Parameter(200, constraints=_positive_int,
        doc="Maximum number of training epochs",
        errmsg="unable to set max number of iterations")

    min_change = Parameter(1e-4,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=0.0)),
        doc="Minimum improvement of the loss below which training stops",
        errmsg="unable to set min change")

    _SKL_PARAMS = {'learning_rate': 'learning_rate_init',
                   'max_num_iterations': 'max_iter',
                   'min_change': 'tol'}

    def __init__(self, **kwargs):
        SKLLearnerAdapter.__init__(self, MLPRegressor(), tags=['mlp'],
                                   **kwargs)

    def _get_skl_params(self, dataset):
        params = SKLLearnerAdapter._get_skl_params(self, dataset)
        params['hidden_layer_sizes'] = (self.params.num_hidden,)
        return params
