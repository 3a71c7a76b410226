import pygame
from tetris_config import CONFIG


class PanelDisplay:
    """Display sink: remembers what the HUD and message overlay should show."""
    def __init__(self):
        self.score=0; self.level=1; self.lines=0
        self.title=None; self.message=None
        self.dirty=True
    def show_score(self,n): self.score=n; self.dirty=True
    def show_level(self,n): self.level=n; self.dirty=True
    def show_lines(self,n): self.lines=n; self.dirty=True
    def show_overlay(self,title,message): self.title=title; self.message=message
    def hide_overlay(self): self.title=None; self.message=None
    @property
    def overlay_visible(self): return self.title is not None

    def draw_message(self,screen,font,big_font,rect):
        if self.title is None: return
        s=pygame.Surface(rect.size,pygame.SRCALPHA); s.fill((0,0,0,170))
        screen.blit(s,rect.topleft)
        t=big_font.render(self.title,True,(240,240,255))
        screen.blit(t,t.get_rect(center=(rect.centerx,rect.centery-20)))
        for i,part in enumerate((self.message or "").split(" | ")):
            m=font.render(part,True,(200,210,235))
            screen.blit(m,m.get_rect(center=(rect.centerx,rect.centery+16+i*22)))


class ConfigOverlay:
    def __init__(self):
        self.active=False
        self.items=[
            ("CELL_SIZE","Cell size",16,48,2),
            ("DAS_MS","DAS",0,400,10),
            ("ARR_MS","ARR",0,200,5),
            ("SOFT_DROP_ARR_MS","Soft drop ARR",0,200,5),
            ("MASTER_VOLUME","Volume",0.0,1.0,0.1),
            ("SOUND","Sound",False,True,None),
            ("MUSIC","Music",False,True,None),
        ]
        self.index=0

    def toggle(self): self.active=not self.active

    def handle(self,e):
        if e.key in (pygame.K_ESCAPE,pygame.K_F1): self.toggle(); return
        if e.key==pygame.K_UP: self.index=(self.index-1)%len(self.items); return
        if e.key==pygame.K_DOWN: self.index=(self.index+1)%len(self.items); return
        key,label,lo,hi,step=self.items[self.index]
        val=CONFIG[key]
        if isinstance(lo,bool):
            if e.key in (pygame.K_RETURN,pygame.K_LEFT,pygame.K_RIGHT): CONFIG[key]=not CONFIG[key]
        else:
            if e.key==pygame.K_LEFT: CONFIG[key]=type(lo)(round(max(lo,val-step),3))
            if e.key==pygame.K_RIGHT: CONFIG[key]=type(lo)(round(min(hi,val+step),3))

    def draw(self,screen,font,w,h):
        if not self.active: return
        s=pygame.Surface((w-80,h-80),pygame.SRCALPHA); s.fill((20,25,40,230))
        screen.blit(s,(40,40))
        screen.blit(font.render("SETTINGS (F1/Esc to close)",True,(230,240,255)),(60,56))
        y=80
        for i,(key,label,lo,hi,step) in enumerate(self.items):
            col=(255,255,255) if i==self.index else (200,210,235)
            v=CONFIG[key]
            txt=f"{label}: {v:.1f}" if isinstance(v,float) else f"{label}: {v}"
            screen.blit(font.render(txt,True,col),(60,40+y)); y+=30
