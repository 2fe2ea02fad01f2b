"""Example plugin adding a 'hello' command."""

from pydantic import BaseModel

from cmdinfra.app import Plugin


class HelloInput(BaseModel):
    name: str = "plugin"


class HelloPlugin(Plugin):
    def initialize(self, cli):
        def hello(parsed_input: HelloInput, context, config):
            print(f"hello, {parsed_input.name}! (from {self.name} v{self.version})")

        cli.add("hello", "Say hello from a plugin").input(HelloInput).action(hello)


plugin = HelloPlugin()
