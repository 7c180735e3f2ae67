import logging
import importlib
import sys

from callprof.ProfilerSystem.Configuration import Configuration
from callprof.ProfilerSystem.Session import Session
from callprof.utils.profiling import collect, display


def load_target(target: str):
    """Import "package.module.function" and return the function."""
    module_name, function_name = target.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, function_name)


def main(config_path: str = "etc/config.properties") -> int:
    try:
        # 读取配置文件
        configuration = Configuration.make(**Configuration.read_properties(config_path))

        if configuration.logging_enabled:
            logging.basicConfig(level=logging.INFO)
        else:
            logging.basicConfig(level=logging.WARNING)

        # 动态加载被分析的函数
        target = load_target(configuration.target)

        session = Session(
            clock=configuration.clock,
            self_label=configuration.self_label,
            layout=configuration.layout,
        )
        collect(
            target,
            output_file=configuration.output_file,
            verbose=configuration.verbose,
            repeat=configuration.repeat,
            show_progress=configuration.show_progress,
            session=session,
        )
        display(configuration.output_file)

    except Exception as e:
        logging.error(f"Profiling failed: {str(e)}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
