#!/usr/bin/env python3

"""
Machine State Tracer

If enabled, this will output information before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Address the current opcode was fetched from
    * OP - OpCode number, followed by its four nibbles

If a crash occurs, all of the above will be outputted, with the addition of:
    * SP    - Stack pointer
    * Stack - Stack contents
    * Keys  - Logical keys currently held
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Debugger:
    def __init__(self):
        self.live = False

    def debug(self, machine, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} ({})"
        ).format(
            *[machine.v[reg_num] for reg_num in range(15, -1, -1)] +
            [machine.i, machine.dt, machine.st, machine.debug_pc, machine.opcode,
             " ".join("{:01x}".format(nibble) for nibble in machine.nibbles)]
        )

        if verbose:
            stack_items = machine.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += "\nSP: {} Stack:{}".format(machine.stack.get_pointer(), stack_str or " (Empty)")
            held_keys = [key for key, pressed in enumerate(machine.keys) if pressed]
            debug_str += "\nKeys: {}".format(" ".join("{:01x}".format(key) for key in held_keys) or "(None)")

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, machine):
        print(self.debug(machine))
