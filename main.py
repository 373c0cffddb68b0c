import sys

from rich.pretty import pprint

from argsift import *

__prog__ = "demo"

tool = Command(auto=False, program=__prog__)
tool.add_option("port", alias="p", type="number", title="listening port")
tool.add_option("name", alias="n", type="string", title="service name")
tool.add_option("verbose", alias="v", type="bool", title="chatty output (--verbose=true)")


if __name__ == '__main__':
    if {"-h", "--help"} & set(sys.argv[1:]):
        tool.output_help({"serve": "start the server", "check": "validate the setup"})
        sys.exit(0)
    pprint(tool.parse_command(sys.argv).result)
    tool.report(shell=True)
