"""Markov Chain Monte Carlo diagnostics and plotting utilities
"""
import numpy as np
import matplotlib.pyplot as plt

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple


def chain_values(chains: Sequence[Sequence[Any]], projection: Callable[[Any], float]) -> List[List[float]]:
    """
    Project every model of every chain to a float.

    Parameters:
    ----------
        chains (list): One list of models per chain, as returned by Runner.run.
        projection (callable): Maps a model to the scalar of interest.

    Returns:
    -------
        values (list): One list of floats per chain.
    """
    return [[float(projection(model)) for model in chain] for chain in chains]


def rhat(chains: Sequence[Sequence[float]]) -> float:
    """
    Gelman-Rubin potential scale reduction factor.

    With m chains of n draws, W the mean within-chain variance and B the
    between-chain variance of the chain means scaled by n,
    R-hat = sqrt(((1 - 1/n) W + B/n) / W). Values close to 1 indicate the
    chains agree.

    Parameters:
    ----------
        chains (list): One sequence of scalar draws per chain, at least two
            chains of equal length.

    Returns:
    -------
        rhat (float): The R-hat statistic.

    Raises:
    ------
        ValueError: If the chains differ in length, or fewer than two chains
            or draws are given.
    """
    lengths = {len(chain) for chain in chains}
    if len(lengths) != 1:
        raise ValueError(f"Unequal chain lengths {sorted(lengths)}, cannot compute R-hat.")
    values = np.asarray(chains, dtype=float)
    m, n = values.shape
    if m < 2 or n < 2:
        raise ValueError("R-hat needs at least two chains of at least two draws.")

    means = values.mean(axis=1)
    w = values.var(axis=1, ddof=1).mean()
    b = n * means.var(ddof=1)
    var_hat = (1.0 - 1.0 / n) * w + b / n
    return float(np.sqrt(var_hat / w))


def autocorrelation(samples: np.ndarray, maxlag: Optional[int] = 100, step: Optional[int] = 1) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the autocorrelation of a set of samples

    Parameters
    ----------
    samples : np.ndarray
        The samples to compute the autocorrelation for. Should be of shape (n_dim, n_samples).
    maxlag : int
        The maximum lag to compute the autocorrelation for.
    step : int
        The step size for the lag. Default is 1.

    Returns
    -------
    lags : np.ndarray
        The lags for which the autocorrelation is computed.
    autos : np.ndarray
        The autocorrelation values for each dimension at each lag.
    """
    if not isinstance(samples, np.ndarray) or samples.ndim != 2:
        raise ValueError("Samples should be a 2D numpy array.")
    if samples.shape[0] > samples.shape[1]:
        raise ValueError("Samples should be in the format (d, N), where d is the number of dimensions and N is the number of samples.")

    ndim, nsamples = samples.shape
    centered = samples - samples.mean(axis=1, keepdims=True)

    # Denominator is the (unnormalised) variance
    denominator = np.sum(centered**2, axis=1)

    lags = np.arange(0, min(maxlag, nsamples), step)
    autos = np.zeros((ndim, len(lags)))
    for zz, lag in enumerate(lags):
        # covariance between all samples *lag apart*
        autos[:, zz] = np.sum(centered[:, : nsamples - lag] * centered[:, lag:], axis=1) / denominator

    return lags, autos


def effective_sample_size(auto_corrs: np.ndarray, n_samples: Optional[int] = None) -> float:
    """
    Estimate the effective sample size from autocorrelations.

    Parameters
    ----------
    auto_corrs : np.ndarray
        Autocorrelations at lags 0, 1, ... of one chain.
    n_samples : int, optional
        Length of the chain. Defaults to the number of lags given.

    Returns
    -------
    ess : float
        The effective sample size.
    """
    n = len(auto_corrs) if n_samples is None else n_samples

    # Truncate the sum at the first negative autocorrelation
    negative = np.where(auto_corrs < 0)[0]
    first_negative = negative[0] if len(negative) > 0 else len(auto_corrs)

    # Lag 0 contributes the leading 1
    return n / (1 + 2 * np.sum(auto_corrs[1:first_negative]))


def plot_trace(chains: Sequence[Sequence[float]], label: Optional[str] = None, img_kwargs: Optional[Dict] = None) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot the trace of one scalar quantity for every chain.

    Parameters
    ----------
    chains : list
        One sequence of scalar draws per chain, e.g. from chain_values.
    label : str, optional
        Y axis label.
    img_kwargs : dict, optional
        Font sizes: label_fontsize, tick_fontsize, legend_fontsize.

    Returns
    -------
    fig : matplotlib.figure.Figure
        The figure object containing the trace plot.
    ax : matplotlib.axes.Axes
        The axes object for the trace plot.
    """
    if len(chains) == 0:
        raise ValueError("No chains to plot.")

    if img_kwargs is None:
        img_kwargs = {
            'label_fontsize': 18,
            'tick_fontsize': 16,
            'legend_fontsize': 16,
        }

    fig, ax = plt.subplots(1, 1, figsize=(16, 6))
    for ii, chain in enumerate(chains):
        ax.plot(np.asarray(chain, dtype=float), alpha=0.5, label=f'chain {ii}')

    ax.set_xlabel('Draw', fontsize=img_kwargs['label_fontsize'])
    ax.set_ylabel(label if label is not None else r'$\theta$', fontsize=img_kwargs['label_fontsize'])
    ax.tick_params(labelsize=img_kwargs['tick_fontsize'])
    ax.xaxis.set_major_locator(plt.MaxNLocator(integer=True))
    ax.legend(fontsize=img_kwargs['legend_fontsize'])

    for spine in ax.spines.values():
        spine.set_color('black')
        spine.set_linewidth(2)

    return fig, ax
