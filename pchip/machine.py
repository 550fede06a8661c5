#!/usr/bin/env python3

"""
Machine Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The
machine owns all emulated state: RAM, registers, call stack, framebuffer,
keypad state and timers.  It never paces itself or talks to the host devices;
the host loop calls tick() for every instruction and tick_timers() for every
timer period, feeds in keypad state with keypress(), and reads the screen back
with get_display().

Faults are fatal.  An unknown opcode raises UnimplementedOpcodeError, and any
address arithmetic that leaves RAM or the stack raises RAMError or StackError.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import (
    APP_INTRO, MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_SET, FONT_GLYPH_SIZE, NUM_REGISTERS, STACK_SIZE, NUM_KEYS,
    DISPLAY_WIDTH, DISPLAY_HEIGHT
)
from .debugger import Debugger
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack

CPU_ENDIAN = "big"  # CHIP-8 is big-endian


class MachineError(Exception):
    pass


class UnimplementedOpcodeError(MachineError):
    def __init__(self, message, opcode, address):
        super().__init__(message)
        self.opcode = opcode
        self.address = address


class Machine:
    def __init__(self, debugger=None):
        self.debugger = Debugger() if debugger is None else debugger
        self.ram = RAM()
        self.ram.resize(MEMORY_SIZE)
        self.stack = Stack(STACK_SIZE)
        self.framebuffer = Framebuffer(DISPLAY_WIDTH, DISPLAY_HEIGHT)

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so register updates are fast
        self.keys = [False] * NUM_KEYS
        self.reset()

    def reset(self):
        # Return to the just-constructed state.  Views handed out by get_display() stay valid.
        self.ram.clear()
        self.ram.write_block(FONT_START, FONT_SET)
        self.framebuffer.clear()
        self.stack.clear()
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0  # Index register

        for key in range(NUM_KEYS):
            self.keys[key] = False

        # Timers
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        # Program counter, the address the current opcode came from, and the current opcode
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0

    def load(self, rom):
        # The host is responsible for keeping ROMs within MAX_ROM_SIZE
        self.ram.write_block(PROGRAM_START, rom)

    def tick(self):
        # Keep track of the program counter before altering it in any way, for diagnostics
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute

        if self.debugger.is_live():
            self.debugger.output(self)

        self.decode_exec()

    def tick_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def keypress(self, index, pressed):
        self.keys[index] = bool(pressed)

    def get_display(self):
        return self.framebuffer.get_display()

    def is_sound_active(self):
        return self.st > 0

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction(self.nibbles[0])

    def inc_pc(self):
        self.pc += 2

    def dec_pc(self):
        # Only used to re-run the keypress wait instruction
        self.pc -= 2

    @property
    def nibbles(self):
        opcode = self.opcode
        return (opcode & 0xF000) >> 12, (opcode & 0xF00) >> 8, (opcode & 0xF0) >> 4, opcode & 0xF

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication.  Don't reference these more than necessary as they are recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise UnimplementedOpcodeError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not implemented."
            ).format(APP_INTRO, self.debugger.debug(self, verbose=True), self.opcode, self.debug_pc),
            self.opcode,
            self.debug_pc
        ) from None

    def _0nnn(self):
        opcode = self.opcode

        if opcode == 0x0000:  # NOP
            return

        if opcode < 0x10:
            # Opcodes 0x1 - 0xF are used internally for first nibble indexing, so can't be looked up
            self._opcode_unsupported()

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        self.framebuffer.clear()

    def _00EE(self):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.stack.push(self.pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.vx] == self.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.vx] != self.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.vx] == self.v[self.vy]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        self.v[vx] = (self.v[vx] + self.byte) & 0xFF  # No carry flag

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.vx] ^= self.v[self.vy]

    def _8xy4(self):  # ADD Vx, Vy
        val = self.v[self.vx] + self.v[self.vy]
        self.v[self.vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this must happen AFTER Vx is set, as Vf may be one of the operands
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        val = self.v[self.vx]
        self.v[self.vx] = val >> 1
        self.v[0xF] = val & 1  # Least-significant bit before the shift

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        val = self.v[self.vx]
        self.v[self.vx] = (val << 1) & 0xFF
        self.v[0xF] = (val >> 7) & 1  # Most-significant bit before the shift

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.vx] != self.v[self.vy]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        self.pc = self.v[0] + self.addr

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Sprites are always 8 pixels wide, and a height of 0 draws nothing.  Every pixel wraps around the screen.
        height = self.nibble
        vx_pos = self.v[self.vx]
        vy_pos = self.v[self.vy]
        xor_pixel = self.framebuffer.xor_pixel
        collided = False
        i = self.i

        for y in range(height):
            spr_data = self.ram.read(i + y)

            for x in range(8):
                if spr_data & (0x80 >> x):
                    if xor_pixel(vx_pos + x, vy_pos + y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        self.v[0xF] = int(collided)

    def _is_key_down(self, key):
        if key >= NUM_KEYS:
            raise MachineError("Key 0x{:02x} at address 0x{:03x} is out of range".format(key, self.debug_pc))

        return self.keys[key]

    def _Ex9E(self):  # SKP Vx
        if self._is_key_down(self.v[self.vx]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if not self._is_key_down(self.v[self.vx]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.vx] = self.dt

    def _Fx0A(self):  # LD Vx, K
        # The timers and display still need servicing while waiting, so rather than blocking, return control to the
        # host and come back to this instruction on the next tick.
        for key, pressed in enumerate(self.keys):
            if pressed:
                self.v[self.vx] = key
                return

        self.dec_pc()

    def _Fx15(self):  # LD DT, Vx
        self.dt = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        self.st = self.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        self.i = (self.i + self.v[self.vx]) & 0xFFFF

    def _Fx29(self):  # LD F, Vx
        self.i = FONT_START + FONT_GLYPH_SIZE * self.v[self.vx]

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.vx]
        i = self.i
        self.ram.write(i, val // 100)             # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)   # Middle digit
        self.ram.write(i + 2, val % 10)           # Least-significant digit

    def _Fx55(self):  # LD [I], Vx
        # Ensure with +1 that the final register is copied.  I is left untouched.
        self.ram.write_block(self.i, self.v[:self.vx + 1])

    def _Fx65(self):  # LD Vx, [I]
        count = self.vx + 1
        self.v[:count] = self.ram.read_block(self.i, count)
