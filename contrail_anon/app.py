from contrail_anon.common.dto import AnonResult, RunOptions
from contrail_anon.common.utils import exception_helper
from contrail_anon.context import Context
from contrail_anon.modes.anonymise import AnonymiseMode
from contrail_anon.version import __version__


class ContrailAnonApp:

    def __init__(self, options: RunOptions):
        self.context = Context(options)
        self.result = AnonResult()

    def _bootstrap(self):
        self.context.logger.info(
            "============> Started contrail_anon (v%s)" % __version__
        )
        if self.context.options.debug:
            params_info = "#--------------- Run options\n"
            params_info += self.context.options.to_json()
            params_info += "\n#-----------------------------------"
            self.context.logger.debug(params_info)

    async def run(self) -> AnonResult:
        self._bootstrap()
        self.result.start(self.context.options)
        try:
            mode = AnonymiseMode(self.context)
            self.result.result_data = await mode.run()
            self.result.complete()
        except Exception as exc:
            self.context.logger.error(exception_helper(show_traceback=True))
            self.result.fail(exc)
        finally:
            self.context.logger.info(
                f"<============ Finished contrail_anon, "
                f"result_code = {self.result.result_code.value}, "
                f"elapsed: {self.result.elapsed} sec"
            )

        return self.result
