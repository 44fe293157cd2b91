"""
Handlers de Stage dummy para testes do Crucible Kitchen.

Cada handler tem efeito explícito e determinístico sobre o Context,
permitindo observar ordem de execução e acúmulo de estado.
"""

from __future__ import annotations


class AppendTrace:
    """Acrescenta o nome do Stage corrente em `state["trace"]`."""

    @staticmethod
    def execute(ctx, opts):
        trace = ctx.get_state("trace", ())
        return ctx.put_state("trace", trace + (ctx.current_stage,))


class Increment:
    """Incrementa `state["counter"]` e registra o valor visto antes do incremento."""

    @staticmethod
    def execute(ctx, opts):
        previous = ctx.get_state("counter", 0)
        seen = ctx.get_state("seen", ())
        return ctx.merge_state({"counter": previous + 1, "seen": seen + (previous,)})


class RecordLoopValue:
    def __init__(self, loop):
        self.loop = loop

    def execute(self, ctx, opts):
        values = ctx.get_state("loop_values", ())
        return ctx.put_state("loop_values", values + (ctx.loop_value(self.loop),))


class RecordLoss:
    @staticmethod
    def execute(ctx, opts):
        step = ctx.get_state("global_step", 0) + 1
        ctx = ctx.put_state("global_step", step)
        return ctx.record_metric("loss", opts.get("loss", 1.0) / step)


class Fail:
    @staticmethod
    def execute(ctx, opts):
        raise RuntimeError(opts.get("message", "boom"))


class ReturnNone:
    @staticmethod
    def execute(ctx, opts):
        return None
