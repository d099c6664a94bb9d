import importlib


def test_tarqeem_ir_package_exports():
    module = importlib.import_module("tarqeem_ir")
    for name in ("parse_ir", "extract_cfg", "categorize", "has_phi_nodes", "get_defined_variables", "IRModule"):
        assert hasattr(module, name)
        assert name in module.__all__
    assert module.__version__.startswith("0.")


def test_parse_then_project_through_package_api(sample_ir):
    tarqeem_ir = importlib.import_module("tarqeem_ir")
    module = tarqeem_ir.parse_ir(sample_ir)
    main = tarqeem_ir.get_function(module, "main")
    graph = tarqeem_ir.extract_cfg(main)
    assert len(graph.nodes) == len(main.blocks)
    assert tarqeem_ir.categorize("phi") == "phi"
    assert tarqeem_ir.has_phi_nodes(main)
