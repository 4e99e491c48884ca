"""
Services — the individual stages of an inception cycle.

    import_resolver  import path of the target package
    renderer         launcher / bridge templates
    emitters         writing the generated files
    build_runner     compile-and-run of the launcher
    janitor          removal of every transient artifact
"""
