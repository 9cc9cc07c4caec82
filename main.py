import traceback
import logging
import os
import yaml
from binforest.utils import env_cfg
from binforest.evaluation.holdout_eval import perform_holdout_evaluation

logger = logging.getLogger(__name__)


def main():
    args = env_cfg()
    args.resdir = logging.getLogger().logdir
    with open(os.path.join(args.resdir, 'args.yaml'), 'w') as f:
        yaml.safe_dump({name: value.name if hasattr(value, 'name') else value
                        for name, value in vars(args).items()}, f)

    logger.info(f"Running hold-out evaluation of the {args.classifier_type.name} classifier...")
    perform_holdout_evaluation(args)


if __name__ == '__main__':
    try:
        main()
    except Exception:
        if logger is not None:
            # Unhandled exceptions go to the log file. The console handler is detached
            # meanwhile, since re-raising prints the trace to stdout anyway
            handlers_bak = logger.handlers
            logger.handlers = [h for h in logger.handlers if type(h) != logging.StreamHandler]
            logger.error(traceback.format_exc())
            logger.handlers = handlers_bak
        raise
    except KeyboardInterrupt:
        logger.info("")
        logger.info("--- Keyboard Interrupt ---")
    finally:
        if logger.handlers:
            logfiles = [handler.baseFilename for handler in logger.handlers if
                        type(handler) == logging.FileHandler]
            logger.info(f"Log file(s) for this run in {' | '.join(logfiles)}")
