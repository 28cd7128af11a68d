def test_top_level_api_imports():
    import bayesindex as b

    for name in [
        "p_direction",
        "p_significance",
        "rope",
        "rope_range",
        "equivalence_test",
        "hdi",
        "eti",
        "point_estimate",
        "map_estimate",
        "describe_posterior",
        "DrawTable",
        "IndexResult",
        "ModelInfo",
        "ModelIntrospector",
        "PosteriorModel",
        "estimate_density",
        "format_index_table",
        "print_equivalence_test",
    ]:
        assert hasattr(b, name)


def test_errors_share_a_base_class():
    from bayesindex import errors

    for exc in [
        errors.InvalidSampleError,
        errors.DensityEstimationError,
        errors.RopeRangeSelectionError,
        errors.UnsupportedModelTypeError,
    ]:
        assert issubclass(exc, errors.BayesIndexError)
